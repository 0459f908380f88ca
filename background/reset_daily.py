#!/usr/bin/env python3
"""
Runs the daily reset once, immediately.
Use it to recover a missed run, or from an external cron instead of the
in-process schedule.
"""

import asyncio
import sys
import os
from datetime import datetime

# Add the parent directory to the path so we can import from the project
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import get_settings
from db.firestore import get_firestore_client
from services.reset_service import ResetService

async def main() -> int:
    """Main function to run the daily reset"""
    print(f"[{datetime.utcnow()}] Starting manual daily reset...")

    settings = get_settings()
    db = get_firestore_client()
    reset_service = ResetService(db, timezone=settings.reset_timezone)

    report = await reset_service.run_daily_reset()

    print(f"[{datetime.utcnow()}] Reset finished:")
    print(f"  - Requests deleted: {report.requests_deleted}")
    print(f"  - Queue entries deleted: {report.queue_deleted}")
    print(f"  - Counters reset: {report.counters_reset}")
    print(f"  - Counter docs cleared: {report.counter_docs_cleared}")
    if report.counter_doc_failures:
        print(f"  - Counter docs failed: {', '.join(report.counter_doc_failures)}")
    if report.error:
        print(f"  - Error: {report.error}")

    return 0 if report.succeeded else 1

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

import asyncio
import re
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from models.counter import (
    COUNTERS_COLLECTION,
    COUNTER_DETAIL_DOC_ID,
    Counter,
    ResetReport,
    counter_detail_reset,
)

REQUESTS_COLLECTION = "requests"
QUEUE_COLLECTION = "queue"

_RESERVED_ID = re.compile(r"^__.*__$")


class InvalidCounterEmail(ValueError):
    """Raised when a counter email cannot name a Firestore collection"""


def derive_counter_collection(email: Optional[str]) -> Optional[str]:
    """
    Returns the name of the collection holding a counter's counterDoc,
    i.e. the part of its email before the first '@'.

    A missing or blank email returns None: the counter has no detail
    collection. An email that cannot produce a valid collection ID raises
    InvalidCounterEmail.
    """
    if not isinstance(email, str) or not email.strip():
        return None

    email = email.strip()
    if "@" not in email:
        raise InvalidCounterEmail(f"Counter email has no '@': {email!r}")

    local_part = email.split("@", 1)[0].strip()
    if not local_part:
        raise InvalidCounterEmail(f"Counter email has an empty local part: {email!r}")
    if "/" in local_part or local_part in (".", "..") or _RESERVED_ID.match(local_part):
        raise InvalidCounterEmail(f"{local_part!r} is not a valid collection ID")

    return local_part


class ResetService:
    """Clears the daily queue collections and resets counter state"""

    def __init__(self, db, timezone: str = "Asia/Kolkata"):
        self.db = db
        self.timezone = ZoneInfo(timezone)

    def _local_now(self) -> str:
        return datetime.now(self.timezone).strftime("%m/%d/%Y, %I:%M:%S %p")

    async def _fetch_all(self, collection_name: str) -> list:
        # The admin SDK client is blocking; keep its round trips off the event loop
        return await asyncio.to_thread(lambda: list(self.db.collection(collection_name).stream()))

    async def clear_collection(self, collection_name: str) -> int:
        """
        Deletes every document of a collection in one batch.
        Errors are left to the caller.
        """
        print(f"🔄 Attempting to clear collection: {collection_name}")
        docs = await self._fetch_all(collection_name)

        if not docs:
            print(f"⚠️  No documents found in collection: {collection_name}")
            return 0

        batch = self.db.batch()
        for doc in docs:
            batch.delete(doc.reference)
        await asyncio.to_thread(batch.commit)

        print(f"🗑️ Collection {collection_name} has been cleared. {len(docs)} documents deleted.")
        return len(docs)

    async def clear_counter_doc(self, collection_name: str) -> None:
        """Empties the token lists of <collection_name>/counterDoc"""
        doc_ref = self.db.collection(collection_name).document(COUNTER_DETAIL_DOC_ID)
        await asyncio.to_thread(doc_ref.update, counter_detail_reset())
        print(f"✅ Cleared receivedTokens, priority and set nowservingtoken to '-' in {collection_name}/{COUNTER_DETAIL_DOC_ID}")

    async def reset_counters(self, report: Optional[ResetReport] = None) -> ResetReport:
        """
        Sets completed to 0 on every counter and clears each counter's
        counterDoc.

        The completed resets are committed together in one batch after the
        loop. The counterDoc updates are written one by one while the batch
        is being staged, so they land whether or not the batch commits.
        """
        if report is None:
            report = ResetReport()

        print("🔄 Resetting counters...")
        try:
            docs = await self._fetch_all(COUNTERS_COLLECTION)
            if not docs:
                print("⚠️  No counters found.")
                return report

            batch = self.db.batch()
            staged = 0
            for doc in docs:
                counter = Counter.from_snapshot(doc)
                stored = (doc.to_dict() or {}).get("completed")
                print(f"Updating counter {counter.id}: current completed value = {stored}")
                batch.update(doc.reference, {"completed": 0})
                staged += 1

                try:
                    collection_name = derive_counter_collection(counter.email)
                    if collection_name is None:
                        continue
                    await self.clear_counter_doc(collection_name)
                    report.counter_docs_cleared += 1
                except Exception as e:
                    print(f"❌ Error updating counterDoc for counter {counter.id}: {e}")
                    report.counter_doc_failures.append(counter.id)

            await asyncio.to_thread(batch.commit)
            report.counters_reset = staged
            print("✅ Counters have been reset: completed set to 0 and received history cleared.")
        except Exception as e:
            report.error = str(e)
            print(f"❌ Error resetting counters: {e}")

        return report

    async def run_daily_reset(self) -> ResetReport:
        """
        Clears requests, then queue, then resets counters. A failing step
        stops the sequence; the error is recorded and never re-raised.
        """
        report = ResetReport()
        print(f"🔄 Cron job started at: {self._local_now()}")
        try:
            report.requests_deleted = await self.clear_collection(REQUESTS_COLLECTION)
            report.queue_deleted = await self.clear_collection(QUEUE_COLLECTION)
            # reset_counters logs and records its own failures
            await self.reset_counters(report)
            report.succeeded = report.error is None
            if report.succeeded:
                print("✅ Collections and counters have been reset successfully.")
        except Exception as e:
            report.error = str(e)
            print(f"❌ Error resetting collections or counters: {e}")
        finally:
            report.finished_at = datetime.utcnow()

        return report

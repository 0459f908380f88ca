import asyncio
from datetime import datetime
from typing import Awaitable, Callable, Optional, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

JOB_ID = "daily_reset"


class ResetScheduler:
    """
    Fires a coroutine function once per cron match.
    A fire that arrives while the previous run is still going is skipped.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        cron: str,
        timezone: str,
        label: Optional[str] = None,
    ):
        self._job = job
        self._cron = cron
        try:
            self._timezone = ZoneInfo(timezone)
        except ZoneInfoNotFoundError:
            raise ValueError(f"Unknown timezone: {timezone}")
        self._label = label or f"'{cron}' ({timezone})"
        # Raises ValueError for a malformed expression
        self._trigger = CronTrigger.from_crontab(cron, timezone=self._timezone)
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._in_flight = False

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def start(self):
        if self.running:
            return

        self._scheduler = AsyncIOScheduler(timezone=self._timezone)
        self._scheduler.add_job(
            self.run_now,
            trigger=self._trigger,
            id=JOB_ID,
            name="Daily collection and counter reset",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        print(f"🔄 Cron job scheduled. Running every day at {self._label}.")
        print(f"Current server time: {self._now().strftime('%m/%d/%Y, %I:%M:%S %p')}")
        print(f"Next run at: {self.next_fire_time()}")

    def next_fire_time(self, now: Optional[datetime] = None) -> Optional[datetime]:
        if now is None:
            now = self._now()
        return self._trigger.get_next_fire_time(None, now)

    async def run_now(self):
        """Runs the job unless a previous run is still in flight"""
        if self._in_flight:
            print("⚠️  Previous reset run is still in progress, skipping this trigger.")
            return None

        self._in_flight = True
        try:
            return await self._job()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            print(f"❌ Scheduled reset failed: {e}")
            return None
        finally:
            self._in_flight = False

    def stop(self):
        if self.running:
            self._scheduler.shutdown(wait=False)
            print("⛔ Reset scheduler stopped.")
        self._scheduler = None

    def _now(self) -> datetime:
        return datetime.now(self._timezone)

"""
Retention sweeper - daily purge of aged item files.

Once per calendar day, at local midnight in a configured IANA timezone, every
item file older than the retention threshold is deleted and the matching
in-memory entry (if any) is dropped. The sweep does not coordinate with
in-flight requests: a file rewritten while a sweep is deciding to delete it
may still be deleted.
"""

import asyncio
import logging
import zoneinfo
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from typing import List, Optional

from jsonstash.errors import ItemNotFoundError
from jsonstash.store import ItemStore

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """Outcome of a single sweep"""

    started_at: datetime
    scanned: int = 0
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    dry_run: bool = False

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(),
            "scanned": self.scanned,
            "deleted": len(self.deleted),
            "failed": len(self.failed),
            "dry_run": self.dry_run,
        }


class RetentionSweeper:
    """
    Deletes items whose file modification time exceeds the retention threshold.

    Usage:
        sweeper = RetentionSweeper(repository, item_store, retention_days=7)
        sweeper.start()      # inside a running event loop
        ...
        await sweeper.stop()
    """

    def __init__(
        self,
        repository,
        item_store: ItemStore,
        retention_days: int = 7,
        timezone_name: str = "Asia/Jakarta",
    ):
        self.repository = repository
        self.item_store = item_store
        self.retention = timedelta(days=retention_days)
        self.tz = zoneinfo.ZoneInfo(timezone_name)

        self.last_report: Optional[SweepReport] = None
        self.next_run_at: Optional[datetime] = None
        self._task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Sweep
    # ------------------------------------------------------------------

    def sweep(self, now: Optional[datetime] = None, dry_run: bool = False) -> SweepReport:
        """
        Scan every item file once and delete the expired ones.

        A failure on one file is logged and the sweep moves on to the next.
        A failure to list the directory ends this sweep only.
        """
        now = now or datetime.now(timezone.utc)
        report = SweepReport(started_at=now, dry_run=dry_run)
        logger.info(f"Starting cleanup for files older than {self.retention.days} days")

        try:
            item_ids = self.repository.list_ids()
        except OSError as e:
            logger.error(f"Error listing item files: {e}", exc_info=True)
            self.last_report = report
            return report

        for item_id in item_ids:
            report.scanned += 1
            try:
                age = self.repository.stat_age(item_id, now=now)
            except ItemNotFoundError:
                # removed by a request between listing and stat
                continue
            except OSError as e:
                logger.error(f"Error reading age of {item_id}: {e}")
                report.failed.append(item_id)
                continue

            if age <= self.retention:
                continue

            if dry_run:
                logger.info(f"Would delete old file: {item_id} (age {age})")
                report.deleted.append(item_id)
                continue

            try:
                self.repository.delete(item_id)
            except OSError as e:
                logger.error(f"Error deleting file {item_id}: {e}")
                report.failed.append(item_id)
                continue

            self.item_store.delete(item_id)
            report.deleted.append(item_id)
            logger.info(f"Deleted old file: {item_id} (age {age})")

        logger.info(
            f"Cleanup finished: scanned={report.scanned} "
            f"deleted={len(report.deleted)} failed={len(report.failed)}"
        )
        self.last_report = report
        return report

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def next_run_after(self, now: datetime) -> datetime:
        """Next local midnight in the sweeper's timezone strictly after `now`."""
        local_now = now.astimezone(self.tz)
        next_day = local_now.date() + timedelta(days=1)
        return datetime.combine(next_day, time(0, 0), tzinfo=self.tz)

    @staticmethod
    def seconds_between(now: datetime, run_at: datetime) -> float:
        # Subtract in UTC: aware datetimes sharing a tzinfo ignore DST offsets.
        delta = run_at.astimezone(timezone.utc) - now.astimezone(timezone.utc)
        return max(delta.total_seconds(), 0.0)

    def seconds_until_next_run(self, now: Optional[datetime] = None) -> float:
        now = now or datetime.now(timezone.utc)
        return self.seconds_between(now, self.next_run_after(now))

    def schedule_next(self, now: datetime, previous: Optional[datetime] = None) -> float:
        """
        Set next_run_at and return the delay until it in seconds.

        `previous` is the midnight the last sleep was aimed at. A timer that
        wakes slightly early must not schedule that same midnight again.
        """
        reference = now if previous is None else max(now, previous)
        self.next_run_at = self.next_run_after(reference)
        return self.seconds_between(now, self.next_run_at)

    async def run_forever(self) -> None:
        """Sleep until midnight, sweep, repeat. Never sweeps at start-up."""
        previous: Optional[datetime] = None
        while True:
            delay = self.schedule_next(datetime.now(timezone.utc), previous)
            previous = self.next_run_at
            logger.info(f"Next cleanup scheduled at {self.next_run_at.isoformat()} (in {delay:.0f}s)")

            await asyncio.sleep(delay)

            try:
                await asyncio.to_thread(self.sweep)
            except Exception as e:
                logger.error(f"Error during cleanup: {e}", exc_info=True)

    def start(self) -> asyncio.Task:
        """Start the background loop on the running event loop (idempotent)."""
        if self.is_running:
            return self._task
        self._task = asyncio.create_task(self.run_forever(), name="retention-sweeper")
        logger.info(
            f"Retention sweeper started (retention={self.retention.days}d, tz={self.tz.key})"
        )
        return self._task

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to unwind."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self.next_run_at = None
        logger.info("Retention sweeper stopped")

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def get_status(self) -> dict:
        return {
            "running": self.is_running,
            "retention_days": self.retention.days,
            "timezone": self.tz.key,
            "next_run_at": self.next_run_at.isoformat() if self.next_run_at else None,
            "last_report": self.last_report.to_dict() if self.last_report else None,
        }

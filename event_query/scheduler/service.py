"""Background watcher that polls the events document for changes."""

from datetime import datetime, timezone
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from event_query.logging import get_logger

logger = get_logger(__name__, component="watcher")

WATCH_JOB_ID = "events-file-watch"


class ReloadWatcher:
    """
    Wraps APScheduler to run a reload check at a fixed polling interval.

    The check (typically EventSourceLoader.reload_if_changed) runs in a
    background thread. At most one check runs at a time and missed runs are
    coalesced, so a slow reload never queues up behind itself.
    """

    def __init__(self, reload_callable: Callable[[], object], interval_seconds: int):
        """
        Initialize the watcher.

        Args:
            reload_callable: Function called on every poll
            interval_seconds: Seconds between polls
        """
        self.reload_callable = reload_callable
        self.interval_seconds = interval_seconds

        self.scheduler = BackgroundScheduler(
            job_defaults={
                "max_instances": 1,
                "coalesce": True,
                "misfire_grace_time": interval_seconds,
            },
            timezone=timezone.utc,
        )

    def start(self) -> None:
        """
        Register the polling job and start the scheduler.

        The first poll happens one interval after startup; the initial load
        is done synchronously by the caller.
        """
        trigger = IntervalTrigger(seconds=self.interval_seconds, timezone=timezone.utc)
        self.scheduler.add_job(
            func=self.reload_callable,
            trigger=trigger,
            id=WATCH_JOB_ID,
            name="Events file watch",
            replace_existing=True,
        )
        self.scheduler.start()

        logger.info(
            f"Watching events file every {self.interval_seconds} seconds",
            extra={
                "event": "watcher.started",
                "interval_seconds": self.interval_seconds,
            },
        )

    def shutdown(self, wait: bool = False) -> None:
        """
        Stop polling.

        Args:
            wait: If True, wait for a running check to finish
        """
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
        logger.info("Watcher stopped", extra={"event": "watcher.stopped"})

    def trigger_now(self) -> None:
        """Run a reload check synchronously in the current thread."""
        logger.debug("Triggering immediate reload check", extra={"event": "watcher.trigger_now"})
        self.reload_callable()

    def is_running(self) -> bool:
        return self.scheduler.running

    def get_next_run_time(self) -> Optional[datetime]:
        """Next scheduled poll, or None if not scheduled."""
        job = self.scheduler.get_job(WATCH_JOB_ID)
        return job.next_run_time if job else None

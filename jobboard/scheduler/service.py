"""Periodic external snapshot refresh on a background thread."""

from datetime import datetime, timezone
from typing import Callable, Optional
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from jobboard.logging import get_logger

logger = get_logger(__name__, component="scheduler")

REFRESH_JOB_ID = "external-refresh"


class SchedulerService:
    """
    Runs the refresh callable on an APScheduler BackgroundScheduler.

    The refresh (including its network waits and backoff sleeps) happens on
    the scheduler's worker thread, never on a request thread. At most one
    refresh runs at a time; a refresh that is still running when the next
    tick fires causes that tick to be skipped.
    """

    def __init__(
        self,
        refresh_callable: Callable[[], object],
        interval_seconds: int,
        shutdown_event: Optional[threading.Event] = None,
    ):
        """
        Args:
            refresh_callable: Called on every tick (e.g. JobService.refresh_now)
            interval_seconds: Seconds between refreshes
            shutdown_event: Set on shutdown so the main thread can stop waiting
        """
        self.refresh_callable = refresh_callable
        self.interval_seconds = interval_seconds
        self.shutdown_event = shutdown_event

        self.scheduler = BackgroundScheduler(
            job_defaults={
                "max_instances": 1,
                "coalesce": True,
                "misfire_grace_time": interval_seconds,
            },
            timezone=timezone.utc,
        )

    def start(self) -> None:
        """Register the refresh job and start; the first refresh runs immediately."""
        next_run = datetime.now(timezone.utc)
        self.scheduler.add_job(
            func=self._run_refresh,
            trigger=IntervalTrigger(seconds=self.interval_seconds, timezone=timezone.utc),
            id=REFRESH_JOB_ID,
            name="External job snapshot refresh",
            replace_existing=True,
            next_run_time=next_run,
        )
        self.scheduler.start()

        logger.info(
            f"Scheduler started with interval: {self.interval_seconds} seconds",
            extra={
                "event": "scheduler.started",
                "interval_seconds": self.interval_seconds,
                "next_run_time": next_run.isoformat(),
            },
        )

    def _run_refresh(self) -> None:
        try:
            self.refresh_callable()
        except Exception as e:
            # Keep the schedule alive; the next tick retries
            logger.error(
                f"Scheduled refresh raised: {e}",
                extra={"event": "scheduler.refresh.failed", "error_type": type(e).__name__},
                exc_info=True,
            )

    def shutdown(self, wait: bool = False) -> None:
        """Stop the scheduler and signal shutdown_event."""
        logger.info(
            "Shutting down scheduler",
            extra={"event": "scheduler.stopping", "wait_for_jobs": wait},
        )

        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)

        if self.shutdown_event:
            self.shutdown_event.set()

        logger.info("Scheduler shutdown complete", extra={"event": "scheduler.stopped"})

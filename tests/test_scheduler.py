"""Unit tests for the scheduler service."""

import threading
import time
from datetime import datetime
from unittest.mock import Mock

from jobboard.scheduler import SchedulerService
from jobboard.scheduler.service import REFRESH_JOB_ID


class TestSchedulerService:
    """Lifecycle and job registration."""

    def test_initialization(self):
        refresh = Mock()
        shutdown_event = threading.Event()

        scheduler = SchedulerService(refresh, interval_seconds=60, shutdown_event=shutdown_event)

        assert scheduler.interval_seconds == 60
        assert scheduler.refresh_callable is refresh
        assert not scheduler.scheduler.running
        assert scheduler.scheduler.get_job(REFRESH_JOB_ID) is None

    def test_start_and_shutdown(self):
        shutdown_event = threading.Event()
        scheduler = SchedulerService(Mock(), interval_seconds=300, shutdown_event=shutdown_event)

        scheduler.start()
        assert scheduler.scheduler.running

        scheduler.shutdown(wait=False)
        assert not scheduler.scheduler.running
        assert shutdown_event.is_set()

    def test_job_registered_without_overlap(self):
        scheduler = SchedulerService(Mock(), interval_seconds=60)

        scheduler.start()
        try:
            job = scheduler.scheduler.get_job(REFRESH_JOB_ID)
            assert job is not None
            assert job.max_instances == 1
            assert job.coalesce is True
            assert isinstance(job.next_run_time, datetime)
        finally:
            scheduler.shutdown(wait=False)

    def test_first_refresh_runs_immediately(self):
        ran = threading.Event()
        scheduler = SchedulerService(ran.set, interval_seconds=3600)

        scheduler.start()
        try:
            assert ran.wait(timeout=5)
        finally:
            scheduler.shutdown(wait=True)

    def test_refresh_exception_is_contained(self):
        refresh = Mock(side_effect=RuntimeError("boom"))
        scheduler = SchedulerService(refresh, interval_seconds=3600)

        scheduler._run_refresh()

        refresh.assert_called_once_with()

    def test_schedule_survives_failing_refresh(self):
        ran = threading.Event()

        def failing_refresh():
            ran.set()
            raise RuntimeError("boom")

        scheduler = SchedulerService(failing_refresh, interval_seconds=3600)

        scheduler.start()
        try:
            assert ran.wait(timeout=5)
            assert scheduler.scheduler.get_job(REFRESH_JOB_ID) is not None
        finally:
            scheduler.shutdown(wait=True)

    def test_shutdown_without_event(self):
        scheduler = SchedulerService(Mock(), interval_seconds=60, shutdown_event=None)

        scheduler.start()
        time.sleep(0.05)
        scheduler.shutdown(wait=False)

        assert not scheduler.scheduler.running

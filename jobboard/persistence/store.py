"""Session-per-call store adapter used by the service layer.

JobStore hides session management from the merger and the service: each call
opens its own session through ``get_session()``, so a failure in one request
never leaves state behind for the next.
"""

from datetime import datetime
from typing import Callable, ContextManager, List, Optional

from sqlalchemy.orm import Session

from jobboard.domain.models import JobRecord
from jobboard.logging import get_logger
from jobboard.utils.timestamps import utc_now

from .database import get_session
from .repositories import JobRepository

logger = get_logger(__name__, component="store")

SessionFactory = Callable[[], ContextManager[Session]]


class JobStore:
    """Read/write access to locally created job postings."""

    def __init__(self, session_factory: SessionFactory = get_session):
        self._session_factory = session_factory

    def find_all(self, title_contains: Optional[str] = None) -> List[JobRecord]:
        with self._session_factory() as session:
            return JobRepository(session).find_all(title_contains=title_contains)

    def find_by_id(self, job_id: str) -> Optional[JobRecord]:
        with self._session_factory() as session:
            return JobRepository(session).find_by_id(job_id)

    def insert(self, record: JobRecord, created_at: Optional[datetime] = None) -> JobRecord:
        with self._session_factory() as session:
            stored = JobRepository(session).insert(record, created_at or utc_now())

        logger.info(
            "Job posting stored",
            extra={"event": "store.job.inserted", "job_id": stored.id, "title": stored.title},
        )
        return stored

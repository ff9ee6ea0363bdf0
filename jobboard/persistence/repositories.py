"""Data access for locally created job postings.

JobRepository works inside a caller-provided session and returns JobRecord
domain objects (source=persistent), never ORM rows.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.domain.models import JobRecord, JobSource
from jobboard.normalization.service import record_from_store

from .exceptions import DataIntegrityError, PersistenceError
from .schema import JobModel

logger = logging.getLogger(__name__)


class JobRepository:
    """Repository for job posting rows."""

    def __init__(self, session: Session):
        self.session = session

    def find_all(self, title_contains: Optional[str] = None) -> List[JobRecord]:
        """All postings, newest insert first.

        Args:
            title_contains: Optional case-insensitive substring filter on the title;
                ``%`` and ``_`` match literally

        Raises:
            PersistenceError: If a database error occurs
        """
        try:
            stmt = select(JobModel)
            if title_contains:
                stmt = stmt.where(JobModel.position.icontains(title_contains, autoescape=True))
            stmt = stmt.order_by(JobModel.created_at.desc())

            return [record_from_store(model.to_row()) for model in self.session.scalars(stmt)]

        except SQLAlchemyError as e:
            logger.error(f"Error listing jobs: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list jobs: {e}") from e

    def find_by_id(self, job_id: str) -> Optional[JobRecord]:
        """Look up one posting; None when absent.

        Raises:
            PersistenceError: If a database error occurs
        """
        try:
            model = self.session.get(JobModel, job_id)
            return record_from_store(model.to_row()) if model is not None else None

        except SQLAlchemyError as e:
            logger.error(f"Error retrieving job {job_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve job: {e}") from e

    def insert(self, record: JobRecord, created_at: datetime) -> JobRecord:
        """Insert a new posting and return it as read back from the row.

        Raises:
            ValueError: If the record has no id or is not a persistent record
            DataIntegrityError: If the id already exists
            PersistenceError: If another database error occurs
        """
        if not record.id:
            raise ValueError("Persistent job records need an id before insert")
        if record.source != JobSource.PERSISTENT:
            raise ValueError(f"Only persistent records can be stored, got {record.source.value}")

        try:
            model = JobModel.from_record(record, created_at)
            self.session.add(model)
            self.session.flush()
            return record_from_store(model.to_row())

        except IntegrityError as e:
            logger.error(f"Integrity error inserting job {record.id}: {e}", exc_info=True)
            raise DataIntegrityError(f"Failed to insert job due to constraint violation: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error inserting job {record.id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to insert job: {e}") from e

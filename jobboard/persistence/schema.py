"""ORM model for locally created job postings.

Column names follow the posting form the boundary layer submits
(``position``, ``job_location``, ``posted_date``), so rows read back from the
store go through the same alias resolution as provider payloads.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Column, Index, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from jobboard.domain.models import JobRecord
from jobboard.utils.timestamps import format_timestamp, parse_iso_datetime

logger = logging.getLogger(__name__)

Base = declarative_base()

# Columns filled from JobRecord.extra when present; anything else lands in details
_EXTRA_COLUMNS = ("city", "state", "country", "categories", "languages")


class JobModel(Base):
    """ORM model for the jobs table."""

    __tablename__ = "jobs"

    job_id = Column(String(64), primary_key=True, nullable=False)

    position = Column(Text, nullable=False, default="")
    company = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    job_location = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    country = Column(String(255), nullable=True)
    category = Column(String(255), nullable=True)
    application_url = Column(Text, nullable=True)

    # Timestamps stored as ISO 8601 strings
    posted_date = Column(String(50), nullable=True)
    created_at = Column(String(50), nullable=False)

    tags = Column(JSON, nullable=True)
    skills = Column(JSON, nullable=True)
    categories = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    requirements = Column(JSON, nullable=True)
    responsibilities = Column(JSON, nullable=True)

    # Free-form posting fields (salary, experience level, ...)
    details = Column(JSON, nullable=True)

    __table_args__ = (
        Index("idx_jobs_created_at", "created_at"),
        Index("idx_jobs_posted_date", "posted_date"),
    )

    def to_row(self) -> Dict[str, Any]:
        """Row as a plain mapping, ready for record_from_store()."""
        row: Dict[str, Any] = dict(self.details or {})
        row.update(
            {
                "job_id": self.job_id,
                "position": self.position,
                "company": self.company,
                "description": self.description,
                "job_location": self.job_location,
                "city": self.city,
                "state": self.state,
                "country": self.country,
                "category": self.category,
                "application_url": self.application_url,
                "posted_date": parse_iso_datetime(self.posted_date) if self.posted_date else None,
                "created_at": parse_iso_datetime(self.created_at),
                "tags": self.tags,
                "skills": self.skills,
                "categories": self.categories,
                "languages": self.languages,
                "requirements": self.requirements,
                "responsibilities": self.responsibilities,
            }
        )
        return {key: value for key, value in row.items() if value is not None}

    @classmethod
    def from_record(cls, record: JobRecord, created_at: datetime) -> "JobModel":
        """Create an ORM row from a persistent JobRecord.

        Args:
            record: Record to store; its id becomes job_id
            created_at: Insertion time (UTC)
        """
        extra = dict(record.extra)
        extra.pop("created_at", None)
        columns = {name: extra.pop(name, None) for name in _EXTRA_COLUMNS}

        return cls(
            job_id=record.id,
            position=record.title,
            company=record.company,
            description=record.description,
            job_location=record.location,
            category=record.category,
            application_url=record.application_url,
            posted_date=format_timestamp(record.posted_at, include_microseconds=True),
            created_at=format_timestamp(created_at, include_microseconds=True),
            tags=_jsonable(record.tags),
            skills=_jsonable(record.skills),
            requirements=_jsonable(record.requirements),
            responsibilities=_jsonable(record.responsibilities),
            details=extra or None,
            **columns,
        )


def _jsonable(value: Any) -> Optional[Any]:
    if value is None:
        return None
    if isinstance(value, tuple):
        return list(value) if value else None
    return value


def create_schema(engine: Engine) -> None:
    """Create tables and indexes if they don't exist (idempotent)."""
    logger.info("Creating database schema if not exists")

    Base.metadata.create_all(engine, checkfirst=True)
    tables = inspect(engine).get_table_names()
    logger.info(f"Database schema ready. Tables: {', '.join(tables)}")

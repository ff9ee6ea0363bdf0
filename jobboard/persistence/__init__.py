"""Persistence for locally created job postings (SQLAlchemy).

Example usage:
    >>> from jobboard.persistence import init_database, JobStore
    >>> init_database("sqlite:///./data/job_board.db")
    >>> store = JobStore()
    >>> store.find_all(title_contains="engineer")
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
)
from .repositories import JobRepository
from .store import JobStore

__all__ = [
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    "JobRepository",
    "JobStore",
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
]

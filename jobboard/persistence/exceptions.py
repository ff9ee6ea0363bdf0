"""Persistence layer exceptions.

All of them derive from PersistenceError, which JobService lets propagate to
the caller: a store failure fails the request that hit it and nothing else.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""


class DatabaseConnectionError(PersistenceError):
    """Database could not be initialized or is not initialized yet."""


class DataIntegrityError(PersistenceError):
    """A constraint was violated (e.g. duplicate job_id)."""

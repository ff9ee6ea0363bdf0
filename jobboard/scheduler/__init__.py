"""Background scheduling of external snapshot refreshes."""

from .service import SchedulerService

__all__ = ["SchedulerService"]

"""Service facade exposed to the boundary layer."""

from .jobs import JobService
from .models import HealthReport, JobListing, SearchResult

__all__ = ["JobService", "JobListing", "SearchResult", "HealthReport"]

"""Domain models for the job board aggregator."""

from .models import ExternalSnapshot, JobQuery, JobRecord, JobSource, SnapshotStatus

__all__ = ["JobRecord", "JobSource", "ExternalSnapshot", "SnapshotStatus", "JobQuery"]

"""Results returned by JobService to the boundary layer."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from jobboard.domain.models import JobRecord, SnapshotStatus


@dataclass
class JobListing:
    """A page of the merged view plus external staleness information.

    Attributes:
        data: Records in this page
        total: Size of the merged view
        has_more: True when records exist past this page
        last_external_update: fetched_at of the snapshot the page was built from
        external_status: never_fetched, fresh or stale
    """

    data: List[JobRecord] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
    last_external_update: Optional[datetime] = None
    external_status: SnapshotStatus = SnapshotStatus.NEVER_FETCHED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [record.to_public_dict() for record in self.data],
            "total": self.total,
            "hasMore": self.has_more,
            "lastExternalUpdate": _iso(self.last_external_update),
            "externalStatus": self.external_status.value,
        }


@dataclass
class SearchResult:
    """A page of search hits over the merged view."""

    query: str
    data: List[JobRecord] = field(default_factory=list)
    total: int = 0
    has_more: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [record.to_public_dict() for record in self.data],
            "total": self.total,
            "hasMore": self.has_more,
            "query": self.query,
        }


@dataclass
class HealthReport:
    """Provider connectivity and snapshot freshness.

    status is "healthy" only when the provider probe succeeded.
    """

    status: str
    provider: str
    snapshot_status: SnapshotStatus
    last_external_update: Optional[datetime]
    checked_at: datetime

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None

"""Grouped counts over a job dataset."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from jobboard.domain.models import JobRecord


@dataclass
class JobStats:
    """Counts per company, location and category.

    Keys are the exact attribute strings; no case or whitespace folding.
    """

    total: int = 0
    by_company: Dict[str, int] = field(default_factory=dict)
    by_location: Dict[str, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    last_updated: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "byCompany": dict(self.by_company),
            "byLocation": dict(self.by_location),
            "byCategory": dict(self.by_category),
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
        }


def _bump(counter: Dict[str, int], key: Optional[str]) -> None:
    if key:
        counter[key] = counter.get(key, 0) + 1


def compute_stats(records: Iterable[JobRecord], now: Optional[datetime] = None) -> JobStats:
    """Single pass over ``records``; records missing an attribute are not grouped under it."""
    stats = JobStats(last_updated=now)

    for record in records:
        stats.total += 1
        _bump(stats.by_company, record.company)
        _bump(stats.by_location, record.location)
        _bump(stats.by_category, record.category)

    return stats

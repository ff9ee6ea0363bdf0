"""Per-request merged view of local postings and the external snapshot."""

from typing import Optional, Protocol, Sequence, Tuple

from jobboard.cache.refresh import RefreshCache
from jobboard.domain.models import ExternalSnapshot, JobRecord
from jobboard.logging import get_logger

logger = get_logger(__name__, component="merger")

View = Tuple[JobRecord, ...]


class RecordSource(Protocol):
    """What the merger needs from the persistent store."""

    def find_all(self, title_contains: Optional[str] = None) -> Sequence[JobRecord]:
        ...


def sort_key(record: JobRecord):
    """Newest first; undated records after every dated one."""
    if record.posted_at is None:
        return (1, 0.0)
    return (0, -record.posted_at.timestamp())


class JobMerger:
    """Builds the unified view served by listing and search.

    Both inputs already hold normalized JobRecords (the store and the cache
    each run their payloads through JobNormalizer), so merging is
    concatenation plus a stable sort. Persistent records are placed first,
    which keeps them ahead of external records with an equal timestamp.
    Records present in both sources are not deduplicated.
    """

    def __init__(self, store: RecordSource, cache: RefreshCache):
        self.store = store
        self.cache = cache

    def build_view(self) -> View:
        """Merged records from both sources, newest first.

        Raises:
            PersistenceError: If the store cannot be read
        """
        view, _ = self.build_view_with_snapshot()
        return view

    def build_view_with_snapshot(self) -> Tuple[View, ExternalSnapshot]:
        """Like build_view(), also returning the snapshot the view was built from."""
        persistent = list(self.store.find_all())
        snapshot = self.cache.get()

        merged = persistent + list(snapshot.records)
        merged.sort(key=sort_key)

        logger.debug(
            "Built merged view",
            extra={
                "event": "merger.view.built",
                "persistent_count": len(persistent),
                "external_count": len(snapshot.records),
                "snapshot_status": snapshot.status.value,
            },
        )
        return tuple(merged), snapshot

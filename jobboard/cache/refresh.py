"""In-memory cache of the external provider's dataset.

RefreshCache owns exactly one ExternalSnapshot reference. refresh() builds a
complete new snapshot off to the side and publishes it with a single
assignment, so readers calling get() always see one whole snapshot, never a
partial mix. When a refresh fails the previous records and fetched_at are kept
and only the status flips to stale: serving old data beats serving none.
"""

import threading
from typing import Optional
from uuid import uuid4

from jobboard.domain.models import ExternalSnapshot, JobSource, SnapshotStatus
from jobboard.logging import get_logger
from jobboard.logging.context import log_context
from jobboard.normalization.service import JobNormalizer
from jobboard.provider.client import ExternalFetcher
from jobboard.provider.models import FetchFailure, FetchResult
from jobboard.utils.clock import SYSTEM_CLOCK, Clock

logger = get_logger(__name__, component="cache")

DEFAULT_REFRESH_LIMIT = 200000


class RefreshCache:
    """Holds the last good external snapshot and refreshes it on demand.

    Refreshes are serialized: a refresh that starts while another is running
    waits for it to finish. Readers never take the refresh lock.
    """

    def __init__(
        self,
        fetcher: ExternalFetcher,
        refresh_limit: int = DEFAULT_REFRESH_LIMIT,
        clock: Clock = SYSTEM_CLOCK,
        normalizer: Optional[JobNormalizer] = None,
    ):
        """
        Args:
            fetcher: Provider client used by refresh()
            refresh_limit: Page size large enough to capture the whole remote dataset
            clock: Source of fetched_at timestamps
            normalizer: Converts provider payloads into JobRecords
        """
        self.fetcher = fetcher
        self.refresh_limit = refresh_limit
        self.clock = clock
        self.normalizer = normalizer or JobNormalizer()
        self._snapshot = ExternalSnapshot.empty()
        self._refresh_lock = threading.Lock()

    def get(self) -> ExternalSnapshot:
        """Current snapshot (empty with status never_fetched before the first success)."""
        return self._snapshot

    def refresh(self) -> FetchResult:
        """Fetch the full provider dataset and swap it in on success.

        Returns:
            The fetch result; on failure the existing snapshot is untouched
            except for being marked stale
        """
        with self._refresh_lock, log_context(refresh_id=uuid4().hex):
            logger.info(
                "External refresh started",
                extra={
                    "event": "cache.refresh.started",
                    "limit": self.refresh_limit,
                    "snapshot_status": self._snapshot.status.value,
                },
            )

            result = self.fetcher.fetch(limit=self.refresh_limit, offset=0)
            if not result.ok:
                self._keep_previous(result)
                return result

            try:
                records = self.normalizer.normalize_batch(result.records, JobSource.EXTERNAL)
            except Exception as e:
                logger.error(
                    f"Failed to normalize provider payload: {e}",
                    extra={"event": "cache.refresh.normalization_failed"},
                    exc_info=True,
                )
                failure = FetchFailure(
                    error=f"Normalization failed: {e}",
                    error_type=type(e).__name__,
                    attempts=result.attempts,
                    retryable=False,
                )
                self._keep_previous(failure)
                return failure

            snapshot = ExternalSnapshot(
                records=records,
                fetched_at=self.clock.now(),
                status=SnapshotStatus.FRESH,
            )
            self._snapshot = snapshot

            logger.info(
                f"External snapshot refreshed with {len(records)} records",
                extra={
                    "event": "cache.refresh.succeeded",
                    "record_count": len(records),
                    "fetched_at": snapshot.fetched_at,
                },
            )
            return result

    def _keep_previous(self, failure: FetchFailure) -> None:
        current = self._snapshot
        if current.has_been_fetched:
            self._snapshot = current.as_stale()

        logger.warning(
            "Failed to update external snapshot, serving previous data if available",
            extra={
                "event": "cache.refresh.failed",
                "error": failure.error,
                "error_type": failure.error_type,
                "attempts": failure.attempts,
                "snapshot_status": self._snapshot.status.value,
                "cached_record_count": len(current.records),
            },
        )

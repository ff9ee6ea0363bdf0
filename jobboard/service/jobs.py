"""Job board service: the operations exposed to the routing/auth boundary.

The boundary layer validates limit/offset/term (see JobQuery) before calling
in; nothing here re-validates. Store failures (PersistenceError) propagate
to the caller and fail only that request. Provider failures never do: the
listing is served from whatever snapshot the cache holds, with its status.
"""

import threading
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Optional
from uuid import uuid4

from jobboard.cache.refresh import RefreshCache
from jobboard.config.environment import EnvironmentConfig
from jobboard.config.models import AppConfig
from jobboard.domain.models import JobRecord
from jobboard.logging import get_logger
from jobboard.normalization.service import JobNormalizer
from jobboard.persistence.store import JobStore
from jobboard.provider.client import ExternalFetcher
from jobboard.provider.models import FetchResult
from jobboard.search.engine import SearchEngine
from jobboard.search.pagination import paginate
from jobboard.stats.aggregator import JobStats, compute_stats
from jobboard.utils.clock import SYSTEM_CLOCK, Clock
from jobboard.view.merger import JobMerger

from .models import HealthReport, JobListing, SearchResult

logger = get_logger(__name__, component="service")


class JobService:
    """Facade tying together store, cache, merger, search and stats.

    Each instance owns its own RefreshCache, so several services (for
    example in tests) never share snapshot state.
    """

    def __init__(
        self,
        store: JobStore,
        cache: RefreshCache,
        clock: Clock = SYSTEM_CLOCK,
        search_engine: Optional[SearchEngine] = None,
        normalizer: Optional[JobNormalizer] = None,
    ):
        self.store = store
        self.cache = cache
        self.clock = clock
        self.merger = JobMerger(store, cache)
        self.search_engine = search_engine or SearchEngine()
        self.normalizer = normalizer or JobNormalizer()

        self._refresh_executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="external-refresh"
        )
        self._pending_refresh: Optional[Future] = None
        self._pending_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        app_config: AppConfig,
        env_config: EnvironmentConfig,
        clock: Clock = SYSTEM_CLOCK,
        store: Optional[JobStore] = None,
    ) -> "JobService":
        """Wire a service from loaded configuration.

        The database must already be initialized when the default store is used.
        """
        fetcher = ExternalFetcher(app_config.provider, env_config.provider_auth_token, clock=clock)
        cache = RefreshCache(fetcher, refresh_limit=app_config.provider.refresh_limit, clock=clock)
        return cls(store or JobStore(), cache, clock=clock)

    def get_jobs(self, limit: int, offset: int) -> JobListing:
        """One page of the merged view, with the external snapshot's freshness."""
        view, snapshot = self.merger.build_view_with_snapshot()
        page = paginate(view, limit, offset)

        logger.debug(
            "Served job listing",
            extra={
                "event": "service.jobs.listed",
                "limit": limit,
                "offset": offset,
                "total": page.total,
            },
        )
        return JobListing(
            data=page.data,
            total=page.total,
            has_more=page.has_more,
            last_external_update=snapshot.fetched_at,
            external_status=snapshot.status,
        )

    def search_jobs(self, term: str, limit: int, offset: int) -> SearchResult:
        """One page of the records in the merged view matching ``term``."""
        view = self.merger.build_view()
        hits = self.search_engine.search(view, term)
        page = paginate(hits, limit, offset)

        logger.info(
            f"Search matched {page.total} of {len(view)} jobs",
            extra={
                "event": "service.jobs.searched",
                "query": term,
                "total": page.total,
                "view_size": len(view),
            },
        )
        return SearchResult(query=term, data=page.data, total=page.total, has_more=page.has_more)

    def get_stats(self) -> JobStats:
        """Counts over the external snapshot.

        Served from whatever the cache holds; before the first successful
        refresh this is an empty dataset.
        """
        snapshot = self.cache.get()
        return compute_stats(snapshot.records, now=self.clock.now())

    def refresh_external(self) -> Future:
        """Manually trigger a snapshot refresh without waiting for it.

        The fetch, its retries and backoff sleeps run on the service's
        refresh worker thread. A trigger arriving while an earlier one is
        still queued or running is coalesced into it.

        Returns:
            Future resolving to the FetchResult of the refresh
        """
        with self._pending_lock:
            pending = self._pending_refresh
            if pending is not None and not pending.done():
                logger.info(
                    "Refresh already in progress, trigger coalesced",
                    extra={"event": "service.refresh.coalesced"},
                )
                return pending

            self._pending_refresh = self._refresh_executor.submit(self.refresh_now)
            logger.info("External refresh queued", extra={"event": "service.refresh.queued"})
            return self._pending_refresh

    def refresh_now(self) -> FetchResult:
        """Refresh the snapshot in the calling thread.

        Used by the scheduler's worker thread and by one-shot CLI runs,
        never by request handlers.
        """
        return self.cache.refresh()

    def close(self) -> None:
        """Stop the refresh worker; a refresh already running is not interrupted."""
        self._refresh_executor.shutdown(wait=False)

    def add_job(self, posting: Mapping[str, Any]) -> JobRecord:
        """Store a new local posting; it shows up in the very next get_jobs().

        A fresh UUID is always assigned as the id, and the posting date
        defaults to now.

        Raises:
            PersistenceError: If the store rejects the insert
        """
        now = self.clock.now()
        record = self.normalizer.new_posting(posting, job_id=str(uuid4()), now=now)
        return self.store.insert(record, created_at=now)

    def get_job(self, job_id: str) -> Optional[JobRecord]:
        """Look up a local posting by id."""
        return self.store.find_by_id(job_id)

    def check_health(self) -> HealthReport:
        """Probe the provider and report snapshot freshness."""
        provider_ok = self.cache.fetcher.ping()
        snapshot = self.cache.get()

        report = HealthReport(
            status="healthy" if provider_ok else "degraded",
            provider="healthy" if provider_ok else "error",
            snapshot_status=snapshot.status,
            last_external_update=snapshot.fetched_at,
            checked_at=self.clock.now(),
        )
        logger.info(
            f"Health check: {report.status}",
            extra={
                "event": "service.health.checked",
                "status": report.status,
                "snapshot_status": snapshot.status.value,
            },
        )
        return report

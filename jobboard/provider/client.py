"""HTTP client for the external job-listing provider.

ExternalFetcher performs one logical fetch as a bounded retry loop:

- attempt k fails with a transport error (connection, timeout, non-2xx)
  -> sleep retry_delay * 2 ** (k - 1), try again
- a 2xx whose body is not a job list -> fail immediately, no retry
- attempts exhausted -> FetchFailure carrying the last error

Nothing is cached here, and no exception escapes fetch().
"""

from typing import Any, Dict, List, Optional, Tuple

import requests

from jobboard.config.models import ProviderConfig
from jobboard.logging import get_logger
from jobboard.utils.clock import SYSTEM_CLOCK, Clock

from .exceptions import (
    ProviderError,
    ProviderHTTPError,
    ProviderResponseError,
    ProviderTimeoutError,
)
from .models import FetchFailure, FetchResult, FetchSuccess

logger = get_logger(__name__, component="provider")

DEFAULT_PAGE_SIZE = 50
TOTAL_COUNT_HEADER = "X-Total-Count"


class ExternalFetcher:
    """Fetches job listings from the provider with retry and backoff.

    Attributes:
        config: Provider connection settings
        clock: Time source used for backoff sleeps
    """

    def __init__(
        self,
        config: ProviderConfig,
        auth_token: str,
        clock: Clock = SYSTEM_CLOCK,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            config: Provider settings (URL, timeout, retry policy)
            auth_token: Bearer token; sent as-is if it already names a scheme
            clock: Injectable clock so tests can observe backoff without waiting
            session: Optional pre-built requests session
        """
        self.config = config
        self.clock = clock
        self._headers = {
            "User-Agent": config.user_agent,
            "Accept": "application/json",
            "Authorization": _authorization_header(auth_token),
        }
        self._session = session or requests.Session()
        self._session.headers.update(self._headers)

    def backoff_delay(self, retry_number: int) -> float:
        """Delay in seconds before retry ``retry_number`` (1-based)."""
        return self.config.retry_delay_seconds * (2 ** (retry_number - 1))

    def fetch(
        self, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0, **filters: Any
    ) -> FetchResult:
        """Fetch one page of jobs.

        Args:
            limit: Page size sent to the provider
            offset: Page offset sent to the provider
            **filters: Extra query parameters; None values are dropped

        Returns:
            FetchSuccess or FetchFailure
        """
        params = self._build_params(limit, offset, filters)
        attempts = self.config.retry_attempts
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            logger.info(
                f"Fetching jobs from provider (attempt {attempt}/{attempts})",
                extra={
                    "event": "provider.fetch.attempt",
                    "attempt": attempt,
                    "max_attempts": attempts,
                    "url": self.config.url,
                    "limit": limit,
                    "offset": offset,
                },
            )

            try:
                records, total = self._request_once(params, self.config.timeout_seconds)
            except ProviderError as e:
                if not e.retryable:
                    logger.error(
                        f"Provider returned an unusable response: {e}",
                        extra={
                            "event": "provider.fetch.bad_response",
                            "attempt": attempt,
                            "error_type": type(e).__name__,
                            "url": self.config.url,
                        },
                    )
                    return FetchFailure(
                        error=str(e),
                        error_type=type(e).__name__,
                        attempts=attempt,
                        retryable=False,
                    )

                last_error = e
                logger.warning(
                    f"Provider fetch attempt {attempt} failed: {e}",
                    extra={
                        "event": "provider.fetch.attempt_failed",
                        "attempt": attempt,
                        "error_type": type(e).__name__,
                        "status_code": getattr(e, "status_code", None),
                    },
                )
                if attempt < attempts:
                    delay = self.backoff_delay(attempt)
                    logger.info(
                        f"Retrying in {delay:.2f}s",
                        extra={"event": "provider.fetch.retrying", "delay_seconds": delay},
                    )
                    self.clock.sleep(delay)
                continue
            except Exception as e:
                logger.error(
                    f"Unexpected error fetching from provider: {e}",
                    extra={"event": "provider.fetch.unexpected_error", "attempt": attempt},
                    exc_info=True,
                )
                return FetchFailure(
                    error=str(e),
                    error_type=type(e).__name__,
                    attempts=attempt,
                    retryable=False,
                )

            logger.info(
                f"Fetched {len(records)} jobs from provider",
                extra={
                    "event": "provider.fetch.succeeded",
                    "attempt": attempt,
                    "record_count": len(records),
                    "total": total,
                },
            )
            return FetchSuccess(
                records=records,
                total=total,
                has_more=len(records) == limit,
                attempts=attempt,
            )

        logger.error(
            f"Provider fetch failed after {attempts} attempts: {last_error}",
            extra={
                "event": "provider.fetch.exhausted",
                "attempts": attempts,
                "error_type": type(last_error).__name__,
            },
        )
        return FetchFailure(
            error=str(last_error),
            error_type=type(last_error).__name__,
            attempts=attempts,
            retryable=True,
        )

    def ping(self) -> bool:
        """Single-attempt connectivity probe (limit=1, short timeout, no retry).

        Runs on a short-lived session of its own; the long-lived session
        belongs to fetch() on the refresh worker thread.
        """
        params = self._build_params(1, 0, {})
        try:
            with requests.Session() as session:
                session.headers.update(self._headers)
                self._request_once(params, self.config.health_timeout_seconds, session=session)
        except ProviderError as e:
            logger.warning(
                f"Provider health probe failed: {e}",
                extra={"event": "provider.ping.failed", "error_type": type(e).__name__},
            )
            return False
        return True

    def _build_params(self, limit: int, offset: int, filters: Dict[str, Any]) -> Dict[str, str]:
        params = {"limit": str(limit), "offset": str(offset)}
        for key, value in filters.items():
            if value is None:
                continue
            params[key] = str(value).lower() if isinstance(value, bool) else str(value)
        return params

    def _request_once(
        self,
        params: Dict[str, str],
        timeout: float,
        session: Optional[requests.Session] = None,
    ) -> Tuple[List[Any], int]:
        """Perform one GET and return (raw records, total).

        Uses ``session`` when given, the fetcher's own session otherwise.

        Raises:
            ProviderTimeoutError: Attempt exceeded ``timeout``
            ProviderHTTPError: Connection failure or non-2xx status
            ProviderResponseError: 2xx response that is not a job list
        """
        url = self.config.url
        try:
            response = (session or self._session).get(url, params=params, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise ProviderTimeoutError(
                f"Request to {url} timed out after {timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            raise ProviderHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if not 200 <= response.status_code < 300:
            raise ProviderHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderResponseError(
                f"Failed to parse JSON response from {url}: {e}", url=url
            ) from e

        records = extract_records(body)
        if records is None:
            raise ProviderResponseError(
                f"Unexpected response shape from {url}: expected a list or an object "
                f"with a 'data' list, got {type(body).__name__}",
                url=url,
            )

        return records, _parse_total(response.headers.get(TOTAL_COUNT_HEADER), len(records))


def extract_records(body: Any) -> Optional[List[Any]]:
    """Pull the job list out of a response body.

    Accepts a bare JSON array or an object with a ``data`` array; returns None
    for anything else.
    """
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return body["data"]
    return None


def _parse_total(header_value: Optional[str], fallback: int) -> int:
    if header_value is None:
        return fallback
    try:
        return int(header_value)
    except (TypeError, ValueError):
        return fallback


def _authorization_header(token: str) -> str:
    token = token.strip()
    # "Bearer abc" or "Token abc" are passed through untouched
    if " " in token:
        return token
    return f"Bearer {token}"

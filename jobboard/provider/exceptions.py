"""Errors raised while talking to the external job provider.

These never escape ExternalFetcher.fetch(); they are turned into a
FetchFailure there. fetch() retries an error only when its ``retryable``
attribute is set: ProviderHTTPError and ProviderTimeoutError are transport
failures and are retried, ProviderResponseError (a 2xx with an unusable
body) is not.
"""

from typing import Optional


class ProviderError(Exception):
    """Base class for provider failures."""

    retryable = False


class ProviderHTTPError(ProviderError):
    """Connection failure or non-2xx status.

    ``status_code`` is 0 when no response was received at all.
    """

    retryable = True

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ProviderTimeoutError(ProviderError):
    """A single attempt exceeded its timeout."""

    retryable = True

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class ProviderResponseError(ProviderError):
    """Successful response whose body is not a job list (data-shape error)."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url

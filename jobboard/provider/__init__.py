"""Client for the external job-listing provider.

    from jobboard.provider import ExternalFetcher
    fetcher = ExternalFetcher(app_config.provider, env_config.provider_auth_token)
    result = fetcher.fetch(limit=50, offset=0)
    if result.ok:
        ...
"""

from .client import ExternalFetcher, extract_records
from .exceptions import (
    ProviderError,
    ProviderHTTPError,
    ProviderResponseError,
    ProviderTimeoutError,
)
from .models import FetchFailure, FetchResult, FetchSuccess

__all__ = [
    "ExternalFetcher",
    "extract_records",
    "FetchSuccess",
    "FetchFailure",
    "FetchResult",
    "ProviderError",
    "ProviderHTTPError",
    "ProviderTimeoutError",
    "ProviderResponseError",
]

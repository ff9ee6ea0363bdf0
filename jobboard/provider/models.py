"""Result types returned by ExternalFetcher.fetch()."""

from dataclasses import dataclass, field
from typing import Any, List, Union


@dataclass(frozen=True)
class FetchSuccess:
    """Provider returned a usable job list.

    Attributes:
        records: Raw job payloads exactly as the provider sent them
        total: X-Total-Count header when present, else len(records)
        has_more: True when a full page came back (len(records) == limit)
        attempts: Number of attempts it took
    """

    records: List[Any] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
    attempts: int = 1

    ok = True


@dataclass(frozen=True)
class FetchFailure:
    """Every attempt failed, or the provider sent an unusable body.

    Attributes:
        error: Message of the last observed error
        error_type: Exception class name of the last error
        attempts: Number of attempts made
        retryable: False for data-shape errors, which are never retried
    """

    error: str
    error_type: str = "ProviderError"
    attempts: int = 0
    retryable: bool = True

    ok = False


FetchResult = Union[FetchSuccess, FetchFailure]

"""Core domain models for job records and the external snapshot.

- JobRecord: one job posting, normalized from either source
- ExternalSnapshot: the last successfully fetched copy of the provider's data
- JobQuery: search/pagination parameters as validated by the boundary layer
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from jobboard.utils.timestamps import ensure_utc

# A tag is either a plain string or a labeled object such as {"label": "Python"}
TagValue = Union[str, Dict[str, Any]]
TextOrList = Union[str, Tuple[TagValue, ...]]


class JobSource(str, Enum):
    """Where a record came from."""

    PERSISTENT = "persistent"
    EXTERNAL = "external"


class SnapshotStatus(str, Enum):
    """Freshness of the external snapshot."""

    NEVER_FETCHED = "never_fetched"
    FRESH = "fresh"
    STALE = "stale"


class JobRecord(BaseModel):
    """A job posting in the shape every downstream component expects.

    Both sources are mapped onto this model by the adapter functions in
    ``jobboard.normalization.service``; fields that were absent in the source
    carry their defaults. Source fields with no named attribute are preserved
    untouched in ``extra``. Instances are frozen once built.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Source-specific identifier")
    source: JobSource = Field(..., description="persistent or external")
    title: str = Field("", description="Job title")
    company: str = Field("", description="Company name")
    description: str = Field("", description="Full description text")
    location: Optional[str] = Field(None, description="Location label")
    category: Optional[str] = Field(None, description="Job category")
    posted_at: Optional[datetime] = Field(None, description="Posting or creation time (UTC)")
    tags: Tuple[TagValue, ...] = Field(default_factory=tuple)
    skills: Tuple[TagValue, ...] = Field(default_factory=tuple)
    requirements: Optional[TextOrList] = None
    responsibilities: Optional[TextOrList] = None
    application_url: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("posted_at")
    @classmethod
    def ensure_posted_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)

    @property
    def is_external(self) -> bool:
        return self.source == JobSource.EXTERNAL

    def to_public_dict(self) -> Dict[str, Any]:
        """Flatten to a JSON-ready dict with ``extra`` merged in at the top level."""
        data = self.model_dump(mode="json", exclude={"extra"})
        return {**self.extra, **data}


class ExternalSnapshot(BaseModel):
    """Immutable copy of the provider dataset plus the time it was captured.

    ``fetched_at`` only ever advances on a successful refresh; a failed refresh
    produces a copy of the previous snapshot with status ``stale``.
    """

    model_config = ConfigDict(frozen=True)

    records: Tuple[JobRecord, ...] = Field(default_factory=tuple)
    fetched_at: Optional[datetime] = None
    status: SnapshotStatus = SnapshotStatus.NEVER_FETCHED

    @classmethod
    def empty(cls) -> "ExternalSnapshot":
        return cls()

    @property
    def has_been_fetched(self) -> bool:
        return self.fetched_at is not None

    def as_stale(self) -> "ExternalSnapshot":
        """Same records and fetched_at, marked stale."""
        return self.model_copy(update={"status": SnapshotStatus.STALE})


class JobQuery(BaseModel):
    """Listing/search parameters, validated at the boundary.

    Bounds come from the validation context (``max_limit``,
    ``max_query_length``) so they follow configuration:

        JobQuery.model_validate(params, context={"max_limit": 500})

    The core components assume they only ever see a valid JobQuery.
    """

    term: str = ""
    limit: int = Field(50, ge=1)
    offset: int = Field(0, ge=0)

    @field_validator("term", mode="before")
    @classmethod
    def strip_term(cls, v: Any, info: ValidationInfo) -> str:
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("Search query must be a string")
        max_length = (info.context or {}).get("max_query_length")
        if max_length is not None and len(v) > max_length:
            raise ValueError(f"Search query too long. Maximum {max_length} characters.")
        return v.strip()

    @field_validator("limit")
    @classmethod
    def limit_within_max(cls, v: int, info: ValidationInfo) -> int:
        max_limit = (info.context or {}).get("max_limit")
        if max_limit is not None and v > max_limit:
            raise ValueError(f"Limit cannot exceed {max_limit}")
        return v

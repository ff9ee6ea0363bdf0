"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ProviderConfig(BaseModel):
    """Connection and retry settings for the external job-listing provider."""

    base_url: str = Field(..., min_length=1, description="Provider API base URL")
    endpoint: str = Field(
        "/jobs/for-you/public-job-board", description="Path of the job listing endpoint"
    )
    timeout_seconds: float = Field(
        30.0, gt=0, le=300, description="Per-attempt request timeout (seconds)"
    )
    retry_attempts: int = Field(3, ge=1, le=10, description="Total attempts per fetch")
    retry_delay_seconds: float = Field(
        1.0, ge=0, le=60, description="Base backoff delay, doubled per retry"
    )
    refresh_limit: int = Field(
        200000, ge=1, description="Page size requested when refreshing the full snapshot"
    )
    health_timeout_seconds: float = Field(
        5.0, gt=0, le=60, description="Timeout for the single health-check probe"
    )
    user_agent: str = Field("JobBoard-API/1.0", min_length=1)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so endpoint concatenation never doubles slashes."""
        stripped = v.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return stripped

    @field_validator("endpoint")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        stripped = v.strip()
        return stripped if stripped.startswith("/") else f"/{stripped}"

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"


class PaginationConfig(BaseModel):
    """Bounds enforced by the boundary layer on limit/offset."""

    default_limit: int = Field(50, ge=1)
    max_limit: int = Field(500, ge=1)

    @model_validator(mode="after")
    def default_within_max(self):
        if self.default_limit > self.max_limit:
            raise ValueError(
                f"default_limit ({self.default_limit}) cannot exceed max_limit ({self.max_limit})"
            )
        return self


class SearchConfig(BaseModel):
    """Search term constraints."""

    max_query_length: int = Field(200, ge=1, le=10000)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="json or key-value")

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the job board aggregator."""

    provider: ProviderConfig
    refresh_interval: str = Field("1h", description="How often the external snapshot refreshes")
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Computed field
    refresh_interval_seconds: Optional[int] = None

    @field_validator("refresh_interval")
    @classmethod
    def validate_refresh_interval(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def compute_refresh_seconds(self):
        self.refresh_interval_seconds = parse_duration(self.refresh_interval)
        return self

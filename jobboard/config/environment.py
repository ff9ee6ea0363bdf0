"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./data/job_board.db"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Secrets and deployment settings read from the environment."""

    def __init__(
        self,
        provider_auth_token: str,
        database_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.provider_auth_token = provider_auth_token
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required:
    - PROVIDER_AUTH_TOKEN: bearer token for the external job provider

    Optional:
    - DATABASE_URL: SQLAlchemy URL for local postings (default: sqlite:///./data/job_board.db)
    - LOG_LEVEL: overrides the configured log level
    - ENVIRONMENT: label attached to log records (default: local)

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    token = (os.getenv("PROVIDER_AUTH_TOKEN") or "").strip()
    database_url = os.getenv("DATABASE_URL")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if not token:
        errors.append("Missing required environment variable: PROVIDER_AUTH_TOKEN")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if database_url is not None and not database_url.strip():
        errors.append("DATABASE_URL is set but empty")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Ensure PROVIDER_AUTH_TOKEN is set",
            ],
        )

    return EnvironmentConfig(
        provider_auth_token=token,
        database_url=database_url,
        log_level=log_level.upper() if log_level else None,
        environment=environment,
    )

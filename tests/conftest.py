"""Shared fixtures for the job board test suite."""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from jobboard.config.models import ProviderConfig
from jobboard.logging.context import clear_log_context
from jobboard.persistence import close_database, init_database


class FakeClock:
    """Clock that records sleeps and advances virtual time instead of waiting."""

    def __init__(self, start: datetime = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start
        self.sleeps: List[float] = []

    def now(self) -> datetime:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += timedelta(seconds=seconds)

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set the required environment variables."""
    monkeypatch.setenv("PROVIDER_AUTH_TOKEN", "test-token")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./test.db")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)


@pytest.fixture
def provider_config():
    return ProviderConfig(
        base_url="https://jobs.example.com",
        timeout_seconds=5,
        retry_attempts=3,
        retry_delay_seconds=1.0,
    )


@pytest.fixture
def database(tmp_path):
    """Initialize a throwaway SQLite database for one test."""
    db_url = f"sqlite:///{tmp_path / 'jobs.db'}"
    init_database(db_url)
    yield db_url
    close_database()


@pytest.fixture(autouse=True)
def clean_log_context():
    clear_log_context()
    yield
    clear_log_context()


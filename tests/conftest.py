"""Pytest configuration for tests."""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env.test file if it exists
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path)

# Set test environment variables before any imports (only if not already set)
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("TIMEZONE", "UTC")


@pytest.fixture
def offsets():
    """Default reminder offsets (7/2/2/1)."""
    from planner.models.planner import ReminderOffsets

    return ReminderOffsets()


@pytest.fixture
def default_schedule():
    """Default planner day: 08:00 start, 9-hour day, catalog order."""
    from planner.models.planner import UserScheduleConfig

    return UserScheduleConfig.from_clock_times("08:00")


@pytest.fixture
def store():
    """Empty in-memory key-value store."""
    from planner.repositories.memory import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


@pytest.fixture
def test_settings():
    """Settings isolated from the process environment."""
    from planner.core.config import Settings

    return Settings(_env_file=None)


@pytest.fixture
def preferences_repo(store, test_settings):
    """Preferences repository over the test store."""
    from planner.repositories.memory import InMemoryPreferencesRepository

    return InMemoryPreferencesRepository(store, config=test_settings)


@pytest.fixture
def records_repo(store):
    """Record repository over the test store."""
    from planner.repositories.memory import InMemoryRecordRepository

    return InMemoryRecordRepository(store)


@pytest.fixture
def planner_service(preferences_repo, records_repo):
    """Planner service wired to the in-memory repositories."""
    from planner.services.planner import PlannerService

    return PlannerService(preferences_repo, records_repo)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast)")
    config.addinivalue_line("markers", "integration: marks tests as repository-to-view flows")

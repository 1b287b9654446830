"""Repository ports and key-value store adapters."""

from planner.repositories.base import KeyValueStore, PreferencesRepository, RecordRepository
from planner.repositories.memory import (
    InMemoryKeyValueStore,
    InMemoryPreferencesRepository,
    InMemoryRecordRepository,
)

__all__ = [
    "KeyValueStore",
    "PreferencesRepository",
    "RecordRepository",
    "InMemoryKeyValueStore",
    "InMemoryPreferencesRepository",
    "InMemoryRecordRepository",
]

"""Repository ports consumed by the planner service."""

from __future__ import annotations

from typing import Protocol

from planner.models.planner import (
    ApplicationRecord,
    DisplayPreferences,
    EventRecord,
    ReminderOffsets,
    UserScheduleConfig,
)
from planner.types.records import PreferencesRecordTD


class KeyValueStore(Protocol):
    """Synchronous string key-value store holding JSON documents."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def get_all_keys(self) -> list[str]: ...


class PreferencesRepository(Protocol):
    """Source of the user's planner and reminder preferences."""

    def load_schedule_config(self) -> UserScheduleConfig: ...

    def load_reminder_offsets(self) -> ReminderOffsets: ...

    def load_display_preferences(self) -> DisplayPreferences: ...

    def save_preferences(self, preferences: PreferencesRecordTD) -> None: ...


class RecordRepository(Protocol):
    """Source of job applications and calendar events."""

    def list_applications(self) -> list[ApplicationRecord]: ...

    def list_events(self) -> list[EventRecord]: ...

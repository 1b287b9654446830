"""In-memory key-value adapters for the repository ports.

Documents use the same key layout as the mobile app's local store:
    planner_preferences       -> PreferencesRecordTD
    application_<id>          -> ApplicationRecordTD
    planner_event_<id>        -> EventRecordTD
"""

from __future__ import annotations

import json
from typing import Any

import pydantic
from structlog import get_logger

from planner.core.config import Settings, settings
from planner.core.errors import InvalidTimeError
from planner.models.planner import (
    ApplicationRecord,
    DisplayPreferences,
    EventRecord,
    ReminderOffsets,
    UserScheduleConfig,
)
from planner.repositories.base import KeyValueStore
from planner.services.time_definitions import default_block_order
from planner.types.records import ApplicationRecordTD, EventRecordTD, PreferencesRecordTD

logger = get_logger()

PREFERENCES_KEY = "planner_preferences"
APPLICATIONS_KEY_PREFIX = "application_"
EVENTS_KEY_PREFIX = "planner_event_"

_OFFSET_KEYS = {
    "days_after_application": "followUpDaysAfterApplication",
    "days_after_interview": "followUpDaysAfterInterview",
    "days_between_follow_ups": "followUpDaysBetweenFollowUps",
    "days_after_interview_for_thank_you": "thankYouDaysAfterInterview",
}


class InMemoryKeyValueStore:
    """Dict-backed KeyValueStore."""

    def __init__(self, items: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def get_all_keys(self) -> list[str]:
        return list(self._items)

    def put_json(self, key: str, document: Any) -> None:
        self.set_item(key, json.dumps(document))


def default_preferences(config: Settings = settings) -> PreferencesRecordTD:
    """Preferences used for any field the stored document lacks."""
    return {
        "startTime": config.default_start_time,
        "timeBlockOrder": default_block_order(),
        "hasCompletedSetup": False,
        "use12HourClock": config.use_12_hour_clock,
        "followUpDaysAfterApplication": config.follow_up_days_after_application,
        "followUpDaysAfterInterview": config.follow_up_days_after_interview,
        "followUpDaysBetweenFollowUps": config.follow_up_days_between_follow_ups,
        "thankYouDaysAfterInterview": config.thank_you_days_after_interview,
        "homeFollowUpRemindersCount": config.home_follow_up_reminders_count,
    }


class InMemoryPreferencesRepository:
    """PreferencesRepository over a KeyValueStore."""

    def __init__(self, store: KeyValueStore, config: Settings = settings):
        self.store = store
        self.config = config

    def load_preferences(self) -> PreferencesRecordTD:
        """Stored preferences merged over defaults. Unreadable documents yield defaults."""
        merged = default_preferences(self.config)

        raw = self.store.get_item(PREFERENCES_KEY)
        if raw is None:
            return merged

        try:
            stored = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("preferences_unreadable", error=str(e))
            return merged

        if not isinstance(stored, dict):
            logger.warning("preferences_unreadable", error="not an object")
            return merged

        merged.update(stored)  # type: ignore[typeddict-item]
        return merged

    def save_preferences(self, preferences: PreferencesRecordTD) -> None:
        current = self.load_preferences()
        current.update(preferences)
        self.store.set_item(PREFERENCES_KEY, json.dumps(current))
        logger.info("preferences_saved", fields=sorted(preferences))

    def load_schedule_config(self) -> UserScheduleConfig:
        """
        Schedule from stored preferences.

        A stored end time is optional; without one the day is
        default_day_length_hours long. Unparseable stored times fall back
        to the configured defaults. A stored block order that is not a list
        falls back to the catalog order; non-string ids in it are dropped.
        """
        prefs = self.load_preferences()
        block_order = _stored_block_order(prefs.get("timeBlockOrder"))

        try:
            return UserScheduleConfig.from_clock_times(
                prefs.get("startTime", self.config.default_start_time),
                prefs.get("endTime"),
                block_order,
                day_length_hours=self.config.default_day_length_hours,
            )
        except (InvalidTimeError, pydantic.ValidationError) as e:
            logger.warning(
                "schedule_preferences_invalid",
                start_time=prefs.get("startTime"),
                end_time=prefs.get("endTime"),
                error=str(e),
            )
            return UserScheduleConfig.from_clock_times(
                self.config.default_start_time,
                None,
                block_order,
                day_length_hours=self.config.default_day_length_hours,
            )

    def load_reminder_offsets(self) -> ReminderOffsets:
        """Stored offsets; each invalid field falls back to its default on its own."""
        prefs = self.load_preferences()
        defaults = default_preferences(self.config)

        offsets: dict[str, int] = {}
        for field, key in _OFFSET_KEYS.items():
            value = prefs.get(key)
            try:
                offsets[field] = getattr(ReminderOffsets.model_validate({field: value}), field)
            except pydantic.ValidationError as e:
                logger.warning("reminder_offset_invalid", field=key, value=value, error=str(e))
                offsets[field] = defaults[key]

        return ReminderOffsets(**offsets)

    def load_display_preferences(self) -> DisplayPreferences:
        prefs = self.load_preferences()
        try:
            return DisplayPreferences(
                use_12_hour_clock=prefs.get("use12HourClock", False),
                home_follow_up_reminders_count=prefs.get("homeFollowUpRemindersCount"),
                has_completed_setup=prefs.get("hasCompletedSetup", False),
            )
        except pydantic.ValidationError as e:
            logger.warning("display_preferences_invalid", error=str(e))
            return DisplayPreferences(
                home_follow_up_reminders_count=self.config.home_follow_up_reminders_count,
            )


class InMemoryRecordRepository:
    """RecordRepository over a KeyValueStore. Unreadable documents are skipped."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def list_applications(self) -> list[ApplicationRecord]:
        applications: list[ApplicationRecord] = []
        for key, document in self._documents(APPLICATIONS_KEY_PREFIX):
            try:
                applications.append(_application_from_document(document))
            except (AttributeError, KeyError, TypeError, pydantic.ValidationError) as e:
                logger.warning("application_record_skipped", key=key, error=str(e))
        return applications

    def list_events(self) -> list[EventRecord]:
        events: list[EventRecord] = []
        for key, document in self._documents(EVENTS_KEY_PREFIX):
            try:
                events.append(_event_from_document(document))
            except (AttributeError, KeyError, TypeError, pydantic.ValidationError) as e:
                logger.warning("event_record_skipped", key=key, error=str(e))
        return events

    def _documents(self, prefix: str) -> list[tuple[str, Any]]:
        documents: list[tuple[str, Any]] = []
        for key in sorted(k for k in self.store.get_all_keys() if k.startswith(prefix)):
            raw = self.store.get_item(key)
            if raw is None:
                continue
            try:
                documents.append((key, json.loads(raw)))
            except json.JSONDecodeError as e:
                logger.warning("record_unreadable", key=key, error=str(e))
        return documents


def _application_from_document(document: ApplicationRecordTD) -> ApplicationRecord:
    return ApplicationRecord(
        id=document["id"],
        company=document.get("company", ""),
        position_title=document.get("positionTitle", ""),
        applied_date=document.get("appliedDate"),
        status=document["status"],
        last_follow_up_date=document.get("lastFollowUpDate"),
        event_ids=document.get("eventIds") or [],
    )


def _event_from_document(document: EventRecordTD) -> EventRecord:
    return EventRecord(
        id=document["id"],
        date_key=document.get("dateKey"),
        title=document.get("title", ""),
        start_time=document.get("startTime"),
        type=document["type"],
        application_id=document.get("applicationId"),
        company=document.get("company"),
        thank_you_note_status=document.get("thankYouNoteStatus"),
    )


def _stored_block_order(stored: Any) -> list[str]:
    if not stored:
        return default_block_order()
    if not isinstance(stored, list):
        logger.warning(
            "schedule_preferences_invalid", time_block_order=stored, error="not a list"
        )
        return default_block_order()

    block_order = [block_id for block_id in stored if isinstance(block_id, str)]
    if len(block_order) != len(stored):
        logger.warning(
            "schedule_preferences_invalid",
            time_block_order=stored,
            error="non-string block ids dropped",
        )
    return block_order or default_block_order()

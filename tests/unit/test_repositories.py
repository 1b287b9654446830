"""Tests for key-value repository adapters (planner/repositories/memory.py)."""

import json
from datetime import date
from unittest.mock import patch

from planner.core.config import Settings
from planner.models.planner import ApplicationStatus, EventType, ThankYouNoteStatus
from planner.repositories.memory import (
    PREFERENCES_KEY,
    InMemoryKeyValueStore,
    InMemoryPreferencesRepository,
    default_preferences,
)
from planner.services.time_definitions import default_block_order
from tests.fixtures.factories import create_application_document, create_event_document


class TestInMemoryKeyValueStore:
    """Tests for InMemoryKeyValueStore."""

    def test_set_get_remove(self, store):
        """Test basic item lifecycle."""
        store.set_item("key", "value")
        assert store.get_item("key") == "value"
        assert store.get_all_keys() == ["key"]

        store.remove_item("key")
        assert store.get_item("key") is None
        store.remove_item("key")  # removing twice is harmless

    def test_put_json(self, store):
        """Test documents are stored as JSON text."""
        store.put_json("doc", {"a": 1})

        assert json.loads(store.get_item("doc")) == {"a": 1}


class TestPreferencesRepository:
    """Tests for InMemoryPreferencesRepository."""

    def test_defaults_when_nothing_stored(self, preferences_repo):
        """Test empty store yields the 08:00 nine-hour default day."""
        config = preferences_repo.load_schedule_config()

        assert config.day_start_minutes == 480
        assert config.day_end_minutes == 1020
        assert config.block_order == default_block_order()

    def test_default_offsets(self, preferences_repo):
        """Test default offsets are 7/2/2/1."""
        offsets = preferences_repo.load_reminder_offsets()

        assert offsets.days_after_application == 7
        assert offsets.days_after_interview == 2
        assert offsets.days_between_follow_ups == 2
        assert offsets.days_after_interview_for_thank_you == 1

    def test_stored_start_without_end_uses_day_length(self, store, preferences_repo):
        """Test a stored start time alone implies start + 9h."""
        store.put_json(PREFERENCES_KEY, {"startTime": "20:00"})

        config = preferences_repo.load_schedule_config()

        assert config.day_start_minutes == 1200
        assert config.day_end_minutes == 300

    def test_stored_end_time_is_used(self, store, preferences_repo):
        """Test an explicit end time overrides the default length."""
        store.put_json(PREFERENCES_KEY, {"startTime": "09:00", "endTime": "15:00"})

        assert preferences_repo.load_schedule_config().day_end_minutes == 900

    def test_unparseable_stored_time_falls_back(self, store, preferences_repo):
        """Test a corrupt stored time falls back to the configured default."""
        store.put_json(PREFERENCES_KEY, {"startTime": "noon", "timeBlockOrder": ["morning"]})

        with patch("planner.repositories.memory.logger") as mock_logger:
            config = preferences_repo.load_schedule_config()

        assert config.day_start_minutes == 480
        assert config.block_order == ["morning"]
        assert mock_logger.warning.called

    def test_unreadable_document_yields_defaults(self, store, preferences_repo):
        """Test non-JSON preferences are ignored."""
        store.set_item(PREFERENCES_KEY, "{not json")

        assert preferences_repo.load_preferences() == default_preferences(
            preferences_repo.config
        )

    def test_stored_offsets(self, store, preferences_repo):
        """Test stored follow-up offsets are read."""
        store.put_json(
            PREFERENCES_KEY,
            {"followUpDaysAfterApplication": 10, "thankYouDaysAfterInterview": 0},
        )

        offsets = preferences_repo.load_reminder_offsets()

        assert offsets.days_after_application == 10
        assert offsets.days_after_interview_for_thank_you == 0
        assert offsets.days_between_follow_ups == 2

    def test_invalid_offsets_fall_back(self, store, preferences_repo):
        """Test negative stored offsets revert to defaults."""
        store.put_json(PREFERENCES_KEY, {"followUpDaysAfterApplication": -3})

        assert preferences_repo.load_reminder_offsets().days_after_application == 7

    def test_invalid_offset_keeps_valid_neighbours(self, store, preferences_repo):
        """Test only the invalid offset reverts; valid stored offsets survive."""
        store.put_json(
            PREFERENCES_KEY,
            {
                "followUpDaysAfterApplication": 10,
                "followUpDaysAfterInterview": "soon",
                "followUpDaysBetweenFollowUps": -1,
                "thankYouDaysAfterInterview": 3,
            },
        )

        with patch("planner.repositories.memory.logger") as mock_logger:
            offsets = preferences_repo.load_reminder_offsets()

        assert offsets.days_after_application == 10
        assert offsets.days_after_interview == 2
        assert offsets.days_between_follow_ups == 2
        assert offsets.days_after_interview_for_thank_you == 3
        assert mock_logger.warning.call_count == 2

    def test_non_list_block_order_uses_catalog_order(self, store, preferences_repo):
        """Test a stored block order that is not a list falls back to the catalog."""
        store.put_json(PREFERENCES_KEY, {"timeBlockOrder": 5})

        with patch("planner.repositories.memory.logger") as mock_logger:
            config = preferences_repo.load_schedule_config()

        assert config.block_order == default_block_order()
        assert mock_logger.warning.call_args[0][0] == "schedule_preferences_invalid"

    def test_non_string_block_ids_are_dropped(self, store, preferences_repo):
        """Test non-string ids are dropped and string ids kept in order."""
        store.put_json(PREFERENCES_KEY, {"timeBlockOrder": ["research", 3, None, "morning"]})

        with patch("planner.repositories.memory.logger") as mock_logger:
            config = preferences_repo.load_schedule_config()

        assert config.block_order == ["research", "morning"]
        assert mock_logger.warning.call_args[0][0] == "schedule_preferences_invalid"

    def test_block_order_without_string_ids_uses_catalog_order(self, store, preferences_repo):
        """Test an order with no usable ids falls back to the catalog."""
        store.put_json(PREFERENCES_KEY, {"timeBlockOrder": [1, None]})

        assert preferences_repo.load_schedule_config().block_order == default_block_order()

    def test_malformed_block_order_still_builds_daily_view(self, store, planner_service):
        """Test a corrupt stored order never breaks the daily view or preview."""
        store.put_json(PREFERENCES_KEY, {"startTime": "08:00", "timeBlockOrder": [1, None]})

        view = planner_service.daily_view(date(2024, 1, 8))

        assert [block.id for block in view.blocks] == default_block_order()
        assert [block.id for block in planner_service.preview("08:00")] == default_block_order()

        store.put_json(PREFERENCES_KEY, {"timeBlockOrder": 5})

        assert [block.id for block in planner_service.daily_view(date(2024, 1, 8)).blocks] == (
            default_block_order()
        )

    def test_display_preferences(self, store, preferences_repo):
        """Test display preferences are read from the document."""
        store.put_json(
            PREFERENCES_KEY,
            {"use12HourClock": True, "homeFollowUpRemindersCount": 5, "hasCompletedSetup": True},
        )

        display = preferences_repo.load_display_preferences()

        assert display.use_12_hour_clock is True
        assert display.home_follow_up_reminders_count == 5
        assert display.has_completed_setup is True

    def test_save_preferences_merges(self, store, preferences_repo):
        """Test saving merges over what is stored."""
        preferences_repo.save_preferences({"startTime": "07:00"})
        preferences_repo.save_preferences({"use12HourClock": True})

        stored = json.loads(store.get_item(PREFERENCES_KEY))

        assert stored["startTime"] == "07:00"
        assert stored["use12HourClock"] is True
        assert preferences_repo.load_schedule_config().day_start_minutes == 420

    def test_defaults_follow_settings(self):
        """Test repository defaults come from the injected settings."""
        config = Settings(_env_file=None, default_start_time="06:00", default_day_length_hours=10)
        repo = InMemoryPreferencesRepository(InMemoryKeyValueStore(), config=config)

        schedule = repo.load_schedule_config()

        assert schedule.day_start_minutes == 360
        assert schedule.day_end_minutes == 960


class TestRecordRepository:
    """Tests for InMemoryRecordRepository."""

    def test_lists_applications(self, store, records_repo):
        """Test stored application documents map to records."""
        store.put_json(
            "application_app_1",
            create_application_document(
                "app_1", status="interview", event_ids=["event_1"], last_follow_up_date="2024-01-09"
            ),
        )

        applications = records_repo.list_applications()

        assert len(applications) == 1
        assert applications[0].id == "app_1"
        assert applications[0].status == ApplicationStatus.INTERVIEW
        assert applications[0].event_ids == ["event_1"]
        assert applications[0].last_follow_up_date == "2024-01-09"
        assert applications[0].position_title == "Software Engineer"

    def test_skips_unreadable_applications(self, store, records_repo):
        """Test bad documents are skipped and logged."""
        store.put_json("application_good", create_application_document("good"))
        store.put_json("application_status", create_application_document("s", status="archived"))
        store.put_json("application_list", ["not", "a", "dict"])
        store.set_item("application_json", "{broken")

        with patch("planner.repositories.memory.logger") as mock_logger:
            applications = records_repo.list_applications()

        assert [application.id for application in applications] == ["good"]
        assert mock_logger.warning.call_count == 3

    def test_lists_events(self, store, records_repo):
        """Test stored event documents map to records."""
        store.put_json(
            "planner_event_event_1",
            create_event_document("event_1", thank_you_note_status="sent"),
        )
        store.put_json(
            "planner_event_event_2",
            create_event_document("event_2", event_type="appointment", application_id=None),
        )

        events = records_repo.list_events()

        assert [event.id for event in events] == ["event_1", "event_2"]
        assert events[0].type == EventType.INTERVIEW
        assert events[0].thank_you_note_status == ThankYouNoteStatus.SENT
        assert events[1].application_id is None

    def test_ignores_other_prefixes(self, store, records_repo):
        """Test only matching key prefixes are read."""
        store.put_json(PREFERENCES_KEY, {"startTime": "08:00"})
        store.put_json("followup_reminder_x", {"id": "x"})

        assert records_repo.list_applications() == []
        assert records_repo.list_events() == []

"""Planner time model: daily planner and home screen views."""

from __future__ import annotations

from datetime import date, datetime

from structlog import get_logger

from planner.core.config import Settings, settings
from planner.core.errors import ValidationError
from planner.models.planner import (
    ApplicationRecord,
    DailyView,
    EventRecord,
    GeneratedTimeBlock,
    HomeReminders,
    ReminderOffsets,
    UserScheduleConfig,
)
from planner.repositories.base import PreferencesRepository, RecordRepository
from planner.services.reminders import (
    compute_reminders,
    count_overdue,
    link_interview_events,
    reminders_due_on,
)
from planner.services.time_blocks import generate_time_blocks, preview_time_blocks
from planner.services.time_definitions import get_day_theme_for_date

logger = get_logger()


def build_daily_view(
    day: date,
    schedule_config: UserScheduleConfig,
    applications: list[ApplicationRecord],
    events: list[EventRecord],
    offsets: ReminderOffsets,
    use_12_hour: bool = False,
) -> DailyView:
    """
    Compose the daily planner view for one date.

    Blocks come from the time block generator; reminders are the ones whose
    due date is exactly ``day`` (``day`` also serves as "today" for overdue
    flags).

    Args:
        day: Planner date
        schedule_config: Day start/end and block order
        applications: Application records
        events: Calendar events, interviews among them
        offsets: Reminder day offsets
        use_12_hour: Display ranges in 12-hour format

    Returns:
        DailyView with theme, blocks and due reminders
    """
    blocks = generate_time_blocks(schedule_config, use_12_hour)
    reminders = compute_reminders(link_interview_events(applications, events), offsets, day)

    return DailyView(
        day=day,
        day_theme=get_day_theme_for_date(day),
        blocks=blocks,
        reminders=reminders_due_on(reminders, day),
    )


def build_home_reminders(
    applications: list[ApplicationRecord],
    events: list[EventRecord],
    offsets: ReminderOffsets,
    today: date,
    limit: int,
) -> HomeReminders:
    """
    Outstanding reminders for the home screen.

    Counts cover the full list; only the reminders list is capped to
    ``limit`` (soonest first).
    """
    if limit < 0:
        raise ValidationError("Reminder display limit must be non-negative", {"limit": limit})

    reminders = compute_reminders(link_interview_events(applications, events), offsets, today)

    return HomeReminders(
        reminders=reminders[:limit],
        total_count=len(reminders),
        overdue_count=count_overdue(reminders),
    )


def local_today(now: datetime, config: Settings = settings) -> date:
    """
    Calendar day of an aware timestamp in the configured planner zone.

    Raises:
        ValidationError: If ``now`` is naive
    """
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValidationError("Timestamp must be timezone-aware", {"now": now.isoformat()})
    return now.astimezone(config.zone).date()


class PlannerService:
    """
    Resolves preferences and records through the repository ports, then
    delegates to the pure view builders.

    Holds no state between calls; each call loads a fresh snapshot.
    """

    def __init__(self, preferences: PreferencesRepository, records: RecordRepository):
        self.preferences = preferences
        self.records = records

    def daily_view(self, day: date) -> DailyView:
        display = self.preferences.load_display_preferences()
        view = build_daily_view(
            day=day,
            schedule_config=self.preferences.load_schedule_config(),
            applications=self.records.list_applications(),
            events=self.records.list_events(),
            offsets=self.preferences.load_reminder_offsets(),
            use_12_hour=display.use_12_hour_clock,
        )
        logger.info(
            "daily_view_built",
            day=day.isoformat(),
            blocks=len(view.blocks),
            reminders=len(view.reminders),
        )
        return view

    def home_reminders(self, today: date) -> HomeReminders:
        display = self.preferences.load_display_preferences()
        result = build_home_reminders(
            applications=self.records.list_applications(),
            events=self.records.list_events(),
            offsets=self.preferences.load_reminder_offsets(),
            today=today,
            limit=display.home_follow_up_reminders_count,
        )
        logger.info(
            "home_reminders_built",
            today=today.isoformat(),
            shown=len(result.reminders),
            total=result.total_count,
            overdue=result.overdue_count,
        )
        return result

    def preview(
        self,
        start_time: str,
        end_time: str | None = None,
        block_order: list[str] | None = None,
    ) -> list[GeneratedTimeBlock]:
        """Setup-screen preview; falls back to the stored block order."""
        display = self.preferences.load_display_preferences()
        if block_order is None:
            block_order = self.preferences.load_schedule_config().block_order
        return preview_time_blocks(start_time, end_time, block_order, display.use_12_hour_clock)

"""Pydantic models for the planner time model."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from planner.utils.time_format import MINUTES_PER_DAY, normalize_minutes, parse_clock_time

# ============================================
# Enums
# ============================================


class ApplicationStatus(StrEnum):
    """Lifecycle status of a job application."""

    APPLIED = "applied"
    INTERVIEW = "interview"
    REJECTED = "rejected"
    NO_RESPONSE = "no-response"


class EventType(StrEnum):
    """Kind of calendar event."""

    INTERVIEW = "interview"
    APPOINTMENT = "appointment"
    REMINDER = "reminder"


class ThankYouNoteStatus(StrEnum):
    """State of the thank-you note for an interview."""

    PENDING = "pending"
    SENT = "sent"
    SKIPPED = "skipped"


class ReminderKind(StrEnum):
    """Kind of derived reminder."""

    FOLLOW_UP = "follow-up"
    THANK_YOU = "thank-you"


# ============================================
# Time Definitions
# ============================================


class TimeRange(BaseModel):
    """Minute offsets of a template block within the reference day."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @property
    def duration(self) -> int:
        """Length in minutes, wrapping past midnight."""
        return normalize_minutes(self.end - self.start)


class TimeBlockDefinition(BaseModel):
    """Immutable template block."""

    model_config = ConfigDict(frozen=True)

    id: str
    default_range: TimeRange | None  # None = open-ended catch-all
    title: str
    description: str | None = None
    editable: bool = True


class DayTheme(BaseModel):
    """Theme for one weekday."""

    model_config = ConfigDict(frozen=True)

    day: str
    theme: str


# ============================================
# Configuration Models
# ============================================


class UserScheduleConfig(BaseModel):
    """User's planner day: start, truncation boundary, and block order."""

    day_start_minutes: int = Field(ge=0, lt=MINUTES_PER_DAY)
    day_end_minutes: int = Field(ge=0, lt=MINUTES_PER_DAY)
    block_order: list[str] | None = None  # None = catalog order

    @classmethod
    def from_clock_times(
        cls,
        start_time: str,
        end_time: str | None = None,
        block_order: list[str] | None = None,
        day_length_hours: int = 9,
    ) -> UserScheduleConfig:
        """
        Build a config from "HH:MM" strings.

        Args:
            start_time: Day start, e.g. "08:00"
            end_time: Day end; defaults to start + day_length_hours (wrapped)
            block_order: Block ids; None keeps the catalog order
            day_length_hours: Length used when end_time is omitted

        Raises:
            InvalidTimeError: If either time is unparseable
        """
        start = parse_clock_time(start_time)
        if end_time is None:
            end = normalize_minutes(start + day_length_hours * 60)
        else:
            end = parse_clock_time(end_time)

        return cls(
            day_start_minutes=start,
            day_end_minutes=end,
            block_order=list(block_order) if block_order is not None else None,
        )


class ReminderOffsets(BaseModel):
    """Day offsets used to derive reminder due dates."""

    days_after_application: int = Field(default=7, ge=0)
    days_after_interview: int = Field(default=2, ge=0)
    days_between_follow_ups: int = Field(default=2, ge=0)
    days_after_interview_for_thank_you: int = Field(default=1, ge=0)


class DisplayPreferences(BaseModel):
    """Presentation preferences read alongside the schedule."""

    use_12_hour_clock: bool = False
    home_follow_up_reminders_count: int = Field(default=3, ge=0)
    has_completed_setup: bool = False


# ============================================
# Input Records (external collaborators)
# ============================================


class EventRecord(BaseModel):
    """Calendar event as supplied by the event repository."""

    id: str
    date_key: str | None  # "YYYY-MM-DD", unparsed
    title: str = ""
    start_time: str | None = None
    type: EventType = EventType.APPOINTMENT
    application_id: str | None = None
    company: str | None = None
    thank_you_note_status: ThankYouNoteStatus | None = None


class InterviewRecord(BaseModel):
    """Interview facts consumed by the reminder scheduler."""

    event_id: str
    interview_date: str | None  # unparsed
    thank_you_note_status: ThankYouNoteStatus | None = None


class ApplicationRecord(BaseModel):
    """Job application as supplied by the application repository."""

    id: str
    company: str = ""
    position_title: str = ""
    applied_date: str | None  # ISO 8601, unparsed
    status: ApplicationStatus = ApplicationStatus.APPLIED
    last_follow_up_date: str | None = None
    event_ids: list[str] = Field(default_factory=list)
    interviews: list[InterviewRecord] = Field(default_factory=list)


# ============================================
# Derived View Models
# ============================================


class GeneratedTimeBlock(BaseModel):
    """Block placed on the user's day. Never persisted."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None
    start_minutes: int | None
    end_minutes: int | None
    display_range: str
    editable: bool


class ReminderItem(BaseModel):
    """Outstanding follow-up or thank-you reminder. Never persisted."""

    model_config = ConfigDict(frozen=True)

    application_id: str
    kind: ReminderKind
    due_date: date
    is_overdue: bool
    company: str = ""
    position_title: str = ""
    event_id: str | None = None  # thank-you reminders only


class DailyView(BaseModel):
    """Everything the daily planner renders for one date."""

    model_config = ConfigDict(frozen=True)

    day: date
    day_theme: DayTheme
    blocks: list[GeneratedTimeBlock]
    reminders: list[ReminderItem]


class HomeReminders(BaseModel):
    """Reminders for the home screen, capped, with banner counts."""

    model_config = ConfigDict(frozen=True)

    reminders: list[ReminderItem]
    total_count: int
    overdue_count: int

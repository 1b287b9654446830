"""Stored record type definitions.

NOTE: These mirror the JSON documents kept in the key-value store under the
prefixes listed in planner/repositories/memory.py. Use NotRequired for
fields older documents may lack.
"""

from typing import NotRequired, TypedDict


class ApplicationRecordTD(TypedDict):
    """Document stored under "application_<id>"."""

    id: str
    positionTitle: str
    company: str
    source: NotRequired[str]
    appliedDate: str  # ISO 8601
    status: str  # "applied" | "interview" | "rejected" | "no-response"
    notes: NotRequired[str]
    eventIds: NotRequired[list[str]]
    lastFollowUpDate: NotRequired[str | None]


class EventRecordTD(TypedDict):
    """Document stored under "planner_event_<id>"."""

    id: str
    dateKey: str  # "YYYY-MM-DD"
    title: str
    startTime: str  # "HH:MM"
    endTime: NotRequired[str]
    type: str  # "interview" | "appointment" | "reminder"
    applicationId: NotRequired[str]
    company: NotRequired[str]
    thankYouNoteStatus: NotRequired[str]  # "pending" | "sent" | "skipped"


class PreferencesRecordTD(TypedDict, total=False):
    """Document stored under "planner_preferences". Merged over defaults."""

    startTime: str  # "HH:MM"
    endTime: str  # "HH:MM"
    timeBlockOrder: list[str]
    hasCompletedSetup: bool
    use12HourClock: bool
    followUpDaysAfterApplication: int
    followUpDaysAfterInterview: int
    followUpDaysBetweenFollowUps: int
    thankYouDaysAfterInterview: int
    homeFollowUpRemindersCount: int

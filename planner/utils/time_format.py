"""Clock-time parsing, minute-of-day arithmetic, and display formatting."""

from __future__ import annotations

import re
from datetime import date, datetime

from planner.core.errors import InvalidDateError, InvalidTimeError

MINUTES_PER_DAY = 24 * 60

# En dash, as rendered by the planner screens
RANGE_SEPARATOR = "–"

_CLOCK_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_clock_time(value: str) -> int:
    """
    Parse a 24-hour "HH:MM" string into minutes after midnight.

    Args:
        value: Clock time such as "08:00" or "8:00"

    Returns:
        Minutes after midnight in [0, 1440)

    Raises:
        InvalidTimeError: If the value is not a valid 24-hour time
    """
    if not isinstance(value, str):
        raise InvalidTimeError(value)

    match = _CLOCK_PATTERN.match(value)
    if not match:
        raise InvalidTimeError(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(value)

    return hours * 60 + minutes


def normalize_minutes(minutes: int) -> int:
    """Wrap a minute count into [0, 1440). Idempotent."""
    return minutes % MINUTES_PER_DAY


def format_clock_time(minutes: int, use_12_hour: bool = False) -> str:
    """Format minutes after midnight as "HH:MM" or "h:MM AM"."""
    minutes = normalize_minutes(minutes)
    hours, mins = divmod(minutes, 60)

    if use_12_hour:
        period = "PM" if hours >= 12 else "AM"
        return f"{hours % 12 or 12}:{mins:02d} {period}"

    return f"{hours:02d}:{mins:02d}"


def format_time_range(start: int | None, end: int | None, use_12_hour: bool = False) -> str:
    """
    Format a block's start/end for display.

    Open-ended blocks (no numeric range) render as "Evening".
    """
    if start is None or end is None:
        return "Evening"

    return (
        f"{format_clock_time(start, use_12_hour)}"
        f"{RANGE_SEPARATOR}"
        f"{format_clock_time(end, use_12_hour)}"
    )


def parse_record_date(value: str | date | None) -> date:
    """
    Parse a stored record date into a calendar date.

    Accepts a date key ("2024-01-01"), a full ISO 8601 timestamp
    ("2024-01-01T09:00:00.000Z"), or a date/datetime object. Timestamps keep
    their own calendar day; no zone conversion is applied.

    Raises:
        InvalidDateError: If the value is missing or unparseable
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value)

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise InvalidDateError(value) from e


def date_key(day: date) -> str:
    """Storage key for a calendar day ("YYYY-MM-DD")."""
    return day.isoformat()

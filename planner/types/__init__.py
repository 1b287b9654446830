"""Type definitions for stored records."""

from planner.types.records import (
    ApplicationRecordTD,
    EventRecordTD,
    PreferencesRecordTD,
)

__all__ = [
    "ApplicationRecordTD",
    "EventRecordTD",
    "PreferencesRecordTD",
]

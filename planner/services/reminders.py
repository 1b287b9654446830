"""Follow-up and thank-you reminder scheduling."""

from __future__ import annotations

from datetime import date, timedelta

from structlog import get_logger

from planner.core.errors import InvalidDateError
from planner.models.planner import (
    ApplicationRecord,
    ApplicationStatus,
    EventRecord,
    EventType,
    InterviewRecord,
    ReminderItem,
    ReminderKind,
    ReminderOffsets,
    ThankYouNoteStatus,
)
from planner.utils.time_format import parse_record_date

logger = get_logger()

# A thank-you reminder is resolved once the note is sent or deliberately skipped
_RESOLVED_THANK_YOU = frozenset({ThankYouNoteStatus.SENT, ThankYouNoteStatus.SKIPPED})


def link_interview_events(
    applications: list[ApplicationRecord], events: list[EventRecord]
) -> list[ApplicationRecord]:
    """
    Attach linked interview events to their applications.

    An interview event belongs to an application when its id is listed in
    the application's event_ids or its application_id names the application.
    Interviews already present on a record are kept; events are not
    attached twice.

    Args:
        applications: Application records
        events: All calendar events

    Returns:
        New application records with interviews populated (inputs untouched)
    """
    interview_events = [e for e in events if e.type == EventType.INTERVIEW]

    linked: list[ApplicationRecord] = []
    for application in applications:
        interviews = list(application.interviews)
        known_ids = {interview.event_id for interview in interviews}
        event_ids = set(application.event_ids)

        for event in interview_events:
            if event.id in known_ids:
                continue
            if event.id in event_ids or event.application_id == application.id:
                interviews.append(
                    InterviewRecord(
                        event_id=event.id,
                        interview_date=event.date_key,
                        thank_you_note_status=event.thank_you_note_status,
                    )
                )
                known_ids.add(event.id)

        linked.append(application.model_copy(update={"interviews": interviews}))

    return linked


def follow_up_due_date(
    application: ApplicationRecord, offsets: ReminderOffsets, today: date
) -> date:
    """
    Next outstanding follow-up date for one application.

    - No interview held yet: applied date + days_after_application
    - Interview held: latest held interview + days_after_interview
    - Follow-up already sent with no interview after it:
      last follow-up + days_between_follow_ups

    Interviews dated after today have not been held and do not count.

    Raises:
        InvalidDateError: If a date the rule depends on is missing or unparseable
    """
    held = [
        interview_date
        for interview_date in _interview_dates(application)
        if interview_date <= today
    ]
    latest_interview = max(held) if held else None

    if application.last_follow_up_date is not None:
        last_follow_up = parse_record_date(application.last_follow_up_date)
        if latest_interview is None or latest_interview <= last_follow_up:
            return last_follow_up + timedelta(days=offsets.days_between_follow_ups)

    if latest_interview is not None:
        return latest_interview + timedelta(days=offsets.days_after_interview)

    applied = parse_record_date(application.applied_date)
    return applied + timedelta(days=offsets.days_after_application)


def thank_you_due_dates(
    application: ApplicationRecord, offsets: ReminderOffsets
) -> list[tuple[str, date]]:
    """
    (event_id, due date) for every interview still awaiting a thank-you note.

    Interviews whose note is sent or skipped are passed over before their
    date is read. A bad date on such an interview still skips the whole
    record in compute_reminders: follow_up_due_date reads every interview
    date to find the held ones.

    Raises:
        InvalidDateError: If a pending interview date is missing or unparseable
    """
    due: list[tuple[str, date]] = []
    for interview in application.interviews:
        if interview.thank_you_note_status in _RESOLVED_THANK_YOU:
            continue
        interview_date = parse_record_date(interview.interview_date)
        due.append(
            (
                interview.event_id,
                interview_date + timedelta(days=offsets.days_after_interview_for_thank_you),
            )
        )
    return due


def compute_reminders(
    applications: list[ApplicationRecord], offsets: ReminderOffsets, today: date
) -> list[ReminderItem]:
    """
    Derive every outstanding reminder across applications.

    Rejected applications never produce reminders. Each remaining
    application yields one follow-up reminder plus one thank-you reminder
    per interview without a sent or skipped note. A record with a bad date
    is logged and skipped; the rest of the batch is unaffected.

    The result is sorted by due date (ties broken by application id, kind,
    and event id) and never truncated; callers apply their own display cap.

    Args:
        applications: Application records with interviews linked
        offsets: Reminder day offsets
        today: Reference day for "held" interviews and overdue flags

    Returns:
        Sorted reminder items
    """
    reminders: list[ReminderItem] = []

    for application in applications:
        if application.status == ApplicationStatus.REJECTED:
            continue

        try:
            items = _reminders_for_application(application, offsets, today)
        except InvalidDateError as e:
            logger.warning(
                "reminder_record_skipped",
                application_id=application.id,
                error=e.message,
                value=e.context.get("value"),
            )
            continue

        reminders.extend(items)

    reminders.sort(key=_sort_key)

    logger.debug(
        "reminders_computed",
        applications=len(applications),
        reminders=len(reminders),
        today=today.isoformat(),
    )

    return reminders


def count_overdue(reminders: list[ReminderItem]) -> int:
    return sum(1 for reminder in reminders if reminder.is_overdue)


def reminders_due_on(reminders: list[ReminderItem], day: date) -> list[ReminderItem]:
    """Reminders whose due date is exactly ``day``."""
    return [reminder for reminder in reminders if reminder.due_date == day]


def _reminders_for_application(
    application: ApplicationRecord, offsets: ReminderOffsets, today: date
) -> list[ReminderItem]:
    # Parse everything before emitting so a bad record yields nothing
    follow_up = follow_up_due_date(application, offsets, today)
    thank_yous = thank_you_due_dates(application, offsets)

    items = [
        ReminderItem(
            application_id=application.id,
            kind=ReminderKind.FOLLOW_UP,
            due_date=follow_up,
            is_overdue=follow_up < today,
            company=application.company,
            position_title=application.position_title,
        )
    ]
    for event_id, due in thank_yous:
        items.append(
            ReminderItem(
                application_id=application.id,
                kind=ReminderKind.THANK_YOU,
                due_date=due,
                is_overdue=due < today,
                company=application.company,
                position_title=application.position_title,
                event_id=event_id,
            )
        )
    return items


def _interview_dates(application: ApplicationRecord) -> list[date]:
    return [parse_record_date(interview.interview_date) for interview in application.interviews]


def _sort_key(reminder: ReminderItem) -> tuple[date, str, str, str]:
    return (reminder.due_date, reminder.application_id, reminder.kind.value, reminder.event_id or "")

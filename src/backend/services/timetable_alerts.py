"""
Timetable alert selection.

Decides which timetable events should raise a reminder at a given minute.
Pure: the scheduler job supplies the events and the current wall-clock
time in the timetable's zone.
"""

from datetime import datetime
from typing import Iterable

from models.cosmos_documents import TimetableEventDocument
from schemas.timetable import TimetableAlert


def sunday_based_weekday(moment: datetime) -> int:
    """Weekday with Sunday as 0, matching TimetableEventDocument.day_of_week."""
    return (moment.weekday() + 1) % 7


def is_alert_due(event: TimetableEventDocument, now: datetime) -> bool:
    """
    True when now is exactly alert_before minutes ahead of the event's start.

    Only same-day reminders fire: an event whose lead time reaches back past
    midnight gets no alert.
    """
    if not event.is_active or event.alert_before <= 0:
        return False
    if event.day_of_week != sunday_based_weekday(now):
        return False
    minute_of_day = now.hour * 60 + now.minute
    return event.start_minute - event.alert_before == minute_of_day


def find_due_alerts(events: Iterable[TimetableEventDocument], now: datetime) -> list[TimetableAlert]:
    """Build an alert for every event whose reminder falls in now's minute."""
    return [
        TimetableAlert(
            event_id=event.id,
            user_id=event.user_id,
            title=event.title,
            location=event.location,
            start_time=event.start_time,
            minutes_before=event.alert_before,
            fired_at=now,
        )
        for event in events
        if is_alert_due(event, now)
    ]

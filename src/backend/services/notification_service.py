"""
Timetable Notification Service

Delivers class reminders to their owners. Each viewer has a bounded inbox
that the client drains through GET /timetable/alerts; every delivery is
also logged.
"""

from collections import defaultdict, deque
from typing import Iterable

import structlog

from core.config import settings
from schemas.timetable import TimetableAlert

logger = structlog.get_logger(__name__)


class NotificationService:
    """
    In-process reminder inbox.

    Features:
    - One bounded inbox per user; the oldest alert is dropped when full
    - Redelivery of the same (event, minute) is ignored
    - Draining returns alerts oldest first and empties the inbox
    """

    def __init__(self, inbox_size: int | None = None):
        self.inbox_size = inbox_size or settings.TIMETABLE_ALERT_INBOX_SIZE
        self._inboxes: defaultdict[str, deque[TimetableAlert]] = defaultdict(
            lambda: deque(maxlen=self.inbox_size)
        )

    def deliver(self, alerts: Iterable[TimetableAlert]) -> int:
        """
        Queue alerts for their owners.

        Returns:
            Number of alerts newly queued
        """
        delivered = 0
        for alert in alerts:
            inbox = self._inboxes[alert.user_id]
            if any(_same_alert(alert, queued) for queued in inbox):
                continue

            inbox.append(alert)
            delivered += 1
            logger.info(
                "timetable_alert_queued",
                user_id=alert.user_id,
                event_id=alert.event_id,
                title=alert.title,
                start_time=alert.start_time,
                minutes_before=alert.minutes_before,
            )
        return delivered

    def drain(self, user_id: str) -> list[TimetableAlert]:
        """Return and clear a user's pending alerts, oldest first."""
        inbox = self._inboxes.pop(user_id, None)
        if not inbox:
            return []
        alerts = list(inbox)
        logger.debug("timetable_alerts_drained", user_id=user_id, count=len(alerts))
        return alerts

    def pending_count(self, user_id: str) -> int:
        inbox = self._inboxes.get(user_id)
        return len(inbox) if inbox else 0


def _same_alert(a: TimetableAlert, b: TimetableAlert) -> bool:
    return a.event_id == b.event_id and a.fired_at.replace(second=0, microsecond=0) == b.fired_at.replace(
        second=0, microsecond=0
    )


_notification_service: NotificationService | None = None


def get_notification_service() -> NotificationService:
    """Get the process-wide notification service."""
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService()
    return _notification_service

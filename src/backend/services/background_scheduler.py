"""
Background Scheduler Service

Manages scheduled background tasks using APScheduler:
- Timetable alerts (every minute, at second 0)

This runs in-process with the FastAPI application.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from core.config import settings
from repositories.provider import is_cosmos_enabled
from services.notification_service import get_notification_service
from services.timetable_alerts import find_due_alerts, sunday_based_weekday

logger = structlog.get_logger(__name__)

# Global scheduler instance
_scheduler: AsyncIOScheduler | None = None


def timetable_now() -> datetime:
    """Current wall-clock time in the zone timetable entries are written in."""
    return datetime.now(ZoneInfo(settings.TIMETABLE_TIMEZONE))


async def timetable_alert_job(now: datetime | None = None) -> int:
    """
    Background job that raises reminders for upcoming classes.

    Loads today's alerting events, selects the ones whose reminder falls in
    the current minute and hands them to the notification service.

    Returns:
        Number of alerts delivered
    """
    from repositories.cosmos_timetable_repository import CosmosTimetableRepository

    now = now or timetable_now()
    repo = CosmosTimetableRepository()

    try:
        events = await repo.list_alerting_for_day(sunday_based_weekday(now))
        alerts = find_due_alerts(events, now)
        delivered = get_notification_service().deliver(alerts)
    except Exception as e:
        logger.error("timetable_alert_job_failed", error=str(e), exc_info=True)
        return 0

    if delivered:
        logger.info("timetable_alert_job_completed", events=len(events), delivered=delivered)
    return delivered


def get_scheduler() -> AsyncIOScheduler:
    """Get the global scheduler instance."""
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone=timezone.utc)
    return _scheduler


async def start_scheduler() -> None:
    """Start the background scheduler with all jobs."""
    if not settings.TIMETABLE_ALERTS_ENABLED:
        logger.info("scheduler_disabled", reason="TIMETABLE_ALERTS_ENABLED is false")
        return
    if not is_cosmos_enabled():
        logger.warning("scheduler_disabled", reason="row store not configured")
        return

    scheduler = get_scheduler()
    if scheduler.running:
        logger.info("scheduler_already_running")
        return

    scheduler.add_job(
        timetable_alert_job,
        trigger=CronTrigger(second=0),  # Every minute at :00
        id="timetable_alerts",
        name="Timetable Alerts",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    logger.info("scheduler_started", jobs=["timetable_alerts"], timezone=settings.TIMETABLE_TIMEZONE)


async def stop_scheduler() -> None:
    """Stop the background scheduler gracefully."""
    global _scheduler

    if _scheduler and _scheduler.running:
        _scheduler.shutdown(wait=False)
        logger.info("scheduler_stopped")

    _scheduler = None

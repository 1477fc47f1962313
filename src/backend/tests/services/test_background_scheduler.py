"""Tests for the background scheduler and the timetable alert job."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from models.cosmos_documents import TimetableEventDocument
from services import background_scheduler
from services.background_scheduler import start_scheduler, stop_scheduler, timetable_alert_job
from services.notification_service import NotificationService

MONDAY_0845 = datetime(2026, 3, 2, 8, 45, tzinfo=timezone.utc)


def calculus() -> TimetableEventDocument:
    return TimetableEventDocument(
        id="ev-1",
        user_id="user-1",
        title="Calculus II",
        day_of_week=1,
        start_time="09:00",
        end_time="10:30",
        alert_before=15,
    )


@pytest.mark.unit
class TestTimetableAlertJob:
    """Tests for timetable_alert_job."""

    async def test_delivers_due_alerts(self):
        notifications = NotificationService(inbox_size=10)

        with (
            patch(
                "repositories.cosmos_timetable_repository.CosmosTimetableRepository.list_alerting_for_day",
                new_callable=AsyncMock,
                return_value=[calculus()],
            ) as mock_list,
            patch.object(background_scheduler, "get_notification_service", return_value=notifications),
        ):
            delivered = await timetable_alert_job(MONDAY_0845)

        assert delivered == 1
        mock_list.assert_awaited_once_with(1)
        assert [a.event_id for a in notifications.drain("user-1")] == ["ev-1"]

    async def test_nothing_due(self):
        notifications = NotificationService(inbox_size=10)

        with (
            patch(
                "repositories.cosmos_timetable_repository.CosmosTimetableRepository.list_alerting_for_day",
                new_callable=AsyncMock,
                return_value=[calculus()],
            ),
            patch.object(background_scheduler, "get_notification_service", return_value=notifications),
        ):
            delivered = await timetable_alert_job(MONDAY_0845.replace(minute=30))

        assert delivered == 0

    async def test_store_failure_is_logged_not_raised(self):
        with patch(
            "repositories.cosmos_timetable_repository.CosmosTimetableRepository.list_alerting_for_day",
            new_callable=AsyncMock,
            side_effect=RuntimeError("store unavailable"),
        ):
            assert await timetable_alert_job(MONDAY_0845) == 0


@pytest.mark.unit
class TestSchedulerLifecycle:
    """Tests for start_scheduler/stop_scheduler."""

    async def test_disabled_by_setting(self):
        with (
            patch.object(background_scheduler.settings, "TIMETABLE_ALERTS_ENABLED", False),
            patch.object(background_scheduler, "get_scheduler") as mock_get,
        ):
            await start_scheduler()

        mock_get.assert_not_called()

    async def test_skipped_without_store(self):
        with (
            patch.object(background_scheduler.settings, "TIMETABLE_ALERTS_ENABLED", True),
            patch.object(background_scheduler, "is_cosmos_enabled", return_value=False),
            patch.object(background_scheduler, "get_scheduler") as mock_get,
        ):
            await start_scheduler()

        mock_get.assert_not_called()

    async def test_registers_minute_job(self):
        scheduler = MagicMock()
        scheduler.running = False

        with (
            patch.object(background_scheduler.settings, "TIMETABLE_ALERTS_ENABLED", True),
            patch.object(background_scheduler, "is_cosmos_enabled", return_value=True),
            patch.object(background_scheduler, "get_scheduler", return_value=scheduler),
        ):
            await start_scheduler()

        scheduler.add_job.assert_called_once()
        kwargs = scheduler.add_job.call_args.kwargs
        assert kwargs["id"] == "timetable_alerts"
        assert kwargs["max_instances"] == 1
        assert kwargs["coalesce"] is True
        scheduler.start.assert_called_once()

    async def test_stop_shuts_down_running_scheduler(self):
        scheduler = MagicMock()
        scheduler.running = True

        with patch.object(background_scheduler, "_scheduler", scheduler):
            await stop_scheduler()
            assert background_scheduler._scheduler is None

        scheduler.shutdown.assert_called_once_with(wait=False)

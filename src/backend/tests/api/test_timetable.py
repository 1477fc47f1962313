"""
Tests for class timetable endpoints.
"""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from models.cosmos_documents import EventColor, TimetableEventDocument
from schemas.timetable import TimetableAlert
from services.notification_service import NotificationService, get_notification_service

ALERT_TIME = datetime(2026, 3, 2, 8, 45, tzinfo=timezone.utc)


def event(event_id: str = "ev-1", **overrides) -> TimetableEventDocument:
    fields = {
        "id": event_id,
        "user_id": "user-1",
        "title": "Calculus II",
        "day_of_week": 1,
        "start_time": "09:00",
        "end_time": "10:30",
        "location": "Room 204",
    }
    fields.update(overrides)
    return TimetableEventDocument(**fields)


@pytest.mark.unit
class TestTimetableEvents:
    """Test /timetable CRUD."""

    async def test_list_events(self, authed_app, client: AsyncClient, repos) -> None:
        repos["timetable"].list_for_user.return_value = [event("ev-1"), event("ev-2", day_of_week=3)]

        response = await client.get("/api/v1/timetable")

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data] == ["ev-1", "ev-2"]
        assert data[0]["alert_before"] == 15
        assert data[0]["color"] == "blue"

    async def test_create_event(self, authed_app, client: AsyncClient, repos) -> None:
        repos["timetable"].create.side_effect = lambda document: document

        response = await client.post(
            "/api/v1/timetable",
            json={
                "title": "Physics Lab",
                "day_of_week": 4,
                "start_time": "14:00",
                "end_time": "16:00",
                "color": "purple",
                "alert_before": 30,
            },
        )

        assert response.status_code == 201
        stored = repos["timetable"].create.call_args.args[0]
        assert stored.user_id == "user-1"
        assert stored.color == "purple"
        assert stored.alert_before == 30
        assert response.json()["title"] == "Physics Lab"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"day_of_week": 7},
            {"start_time": "9:00"},
            {"start_time": "24:00"},
            {"start_time": "10:00", "end_time": "10:00"},
            {"start_time": "11:00", "end_time": "10:00"},
            {"alert_before": 20},
            {"title": "   "},
        ],
    )
    async def test_create_validation(self, authed_app, client: AsyncClient, repos, overrides) -> None:
        payload = {"title": "Seminar", "day_of_week": 2, "start_time": "09:00", "end_time": "10:00"}
        payload.update(overrides)

        response = await client.post("/api/v1/timetable", json=payload)

        assert response.status_code == 422
        repos["timetable"].create.assert_not_called()

    async def test_update_event(self, authed_app, client: AsyncClient, repos) -> None:
        existing = event()
        repos["timetable"].get_by_id.return_value = existing
        repos["timetable"].update.return_value = event(color="red", end_time="11:00")

        response = await client.put("/api/v1/timetable/ev-1", json={"color": "red", "end_time": "11:00"})

        assert response.status_code == 200
        repos["timetable"].update.assert_awaited_once_with(existing, color=EventColor.RED, end_time="11:00")

    async def test_update_rejects_inverted_range(self, authed_app, client: AsyncClient, repos) -> None:
        repos["timetable"].get_by_id.return_value = event()

        response = await client.put("/api/v1/timetable/ev-1", json={"start_time": "11:00"})

        assert response.status_code == 422
        repos["timetable"].update.assert_not_called()

    async def test_update_missing(self, authed_app, client: AsyncClient, repos) -> None:
        repos["timetable"].get_by_id.return_value = None

        response = await client.put("/api/v1/timetable/ev-9", json={"title": "New"})

        assert response.status_code == 404

    async def test_delete(self, authed_app, client: AsyncClient, repos) -> None:
        repos["timetable"].delete.return_value = True

        response = await client.delete("/api/v1/timetable/ev-1")

        assert response.status_code == 204
        repos["timetable"].delete.assert_awaited_once_with("ev-1", "user-1")

    async def test_delete_missing(self, authed_app, client: AsyncClient, repos) -> None:
        repos["timetable"].delete.return_value = False

        response = await client.delete("/api/v1/timetable/ev-1")

        assert response.status_code == 404


@pytest.mark.unit
class TestTimetableAlerts:
    """Test GET /timetable/alerts."""

    async def test_drains_own_alerts(self, authed_app, client: AsyncClient) -> None:
        notifications = NotificationService(inbox_size=10)
        notifications.deliver(
            [
                TimetableAlert(
                    event_id="ev-1",
                    user_id="user-1",
                    title="Calculus II",
                    location="Room 204",
                    start_time="09:00",
                    minutes_before=15,
                    fired_at=ALERT_TIME,
                ),
                TimetableAlert(
                    event_id="ev-7",
                    user_id="user-2",
                    title="History",
                    start_time="09:00",
                    minutes_before=15,
                    fired_at=ALERT_TIME,
                ),
            ]
        )
        authed_app.dependency_overrides[get_notification_service] = lambda: notifications

        first = await client.get("/api/v1/timetable/alerts")
        second = await client.get("/api/v1/timetable/alerts")

        assert [alert["event_id"] for alert in first.json()] == ["ev-1"]
        assert second.json() == []
        assert notifications.pending_count("user-2") == 1

"""
Cosmos DB Timetable repository.

Events are partitioned by user_id. The alert scheduler reads across
partitions for one weekday at a time.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from db.cosmos_session import (
    TIMETABLE_CONTAINER,
    create_item,
    delete_item,
    query_items,
    read_item,
    upsert_item,
)
from models.cosmos_documents import EventColor, TimetableEventDocument

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = (
    "title",
    "description",
    "day_of_week",
    "start_time",
    "end_time",
    "location",
    "color",
    "alert_before",
    "is_active",
)


def timetable_order(events: list[TimetableEventDocument]) -> list[TimetableEventDocument]:
    """Order events by day of week, then start time."""
    return sorted(events, key=lambda event: (event.day_of_week, event.start_minute))


class CosmosTimetableRepository:
    """Repository for timetable events using Cosmos DB."""

    async def get_by_id(self, event_id: str, user_id: str) -> Optional[TimetableEventDocument]:
        data = await read_item(TIMETABLE_CONTAINER, event_id, partition_key=user_id)
        if data is None:
            return None
        return TimetableEventDocument(**data)

    async def list_for_user(self, user_id: str) -> list[TimetableEventDocument]:
        """Owner's active events, ordered by day then start time."""
        results = await query_items(
            TIMETABLE_CONTAINER,
            "SELECT * FROM c WHERE c.user_id = @user_id AND c.is_active = true",
            parameters=[{"name": "@user_id", "value": user_id}],
            partition_key=user_id,
        )
        return timetable_order([TimetableEventDocument(**item) for item in results])

    async def list_alerting_for_day(self, day_of_week: int) -> list[TimetableEventDocument]:
        """Active events on a weekday that have an alert configured (cross-partition)."""
        results = await query_items(
            TIMETABLE_CONTAINER,
            """
            SELECT * FROM c
            WHERE c.day_of_week = @day
              AND c.is_active = true
              AND c.alert_before > 0
            """,
            parameters=[{"name": "@day", "value": day_of_week}],
        )
        return [TimetableEventDocument(**item) for item in results]

    async def create(self, event: TimetableEventDocument) -> TimetableEventDocument:
        await create_item(TIMETABLE_CONTAINER, event.model_dump(mode="json"))
        logger.debug(f"Created timetable event {event.id} for {event.user_id}")
        return event

    async def update(self, event: TimetableEventDocument, **updates) -> TimetableEventDocument:
        """Apply field updates to an event the caller has already loaded."""
        for field in _UPDATABLE_FIELDS:
            if field in updates and updates[field] is not None:
                value = updates[field]
                setattr(event, field, value.value if isinstance(value, EventColor) else value)
        event.updated_at = datetime.now(timezone.utc)

        await upsert_item(TIMETABLE_CONTAINER, event.model_dump(mode="json"))
        return event

    async def delete(self, event_id: str, user_id: str) -> bool:
        return await delete_item(TIMETABLE_CONTAINER, event_id, partition_key=user_id)

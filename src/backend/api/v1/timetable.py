"""
Class timetable endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import CurrentUser
from models.cosmos_documents import TimetableEventDocument
from repositories.provider import TimetableRepositoryProtocol, get_timetable_repository
from schemas.timetable import (
    TimetableAlert,
    TimetableEvent,
    TimetableEventCreate,
    TimetableEventUpdate,
)
from services.notification_service import NotificationService, get_notification_service

router = APIRouter()


async def _get_own_event(event_id: str, user_id: str, timetable_repo):
    event = await timetable_repo.get_by_id(event_id, user_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.get("", response_model=list[TimetableEvent])
async def list_events(
    current_user: CurrentUser,
    timetable_repo: TimetableRepositoryProtocol = Depends(get_timetable_repository),
) -> list[TimetableEvent]:
    """List the viewer's active events ordered by day then start time."""
    events = await timetable_repo.list_for_user(current_user.id)
    return [TimetableEvent.model_validate(event) for event in events]


@router.get("/alerts", response_model=list[TimetableAlert])
async def drain_alerts(
    current_user: CurrentUser,
    notifications: NotificationService = Depends(get_notification_service),
) -> list[TimetableAlert]:
    """Return and clear the viewer's pending class reminders."""
    return notifications.drain(current_user.id)


@router.post("", response_model=TimetableEvent, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: TimetableEventCreate,
    current_user: CurrentUser,
    timetable_repo: TimetableRepositoryProtocol = Depends(get_timetable_repository),
) -> TimetableEvent:
    event = TimetableEventDocument(user_id=current_user.id, **event_data.model_dump())
    event = await timetable_repo.create(event)
    return TimetableEvent.model_validate(event)


@router.put("/{event_id}", response_model=TimetableEvent)
async def update_event(
    event_id: str,
    event_data: TimetableEventUpdate,
    current_user: CurrentUser,
    timetable_repo: TimetableRepositoryProtocol = Depends(get_timetable_repository),
) -> TimetableEvent:
    event = await _get_own_event(event_id, current_user.id, timetable_repo)

    updates = event_data.model_dump(exclude_unset=True)
    start_time = updates.get("start_time") or event.start_time
    end_time = updates.get("end_time") or event.end_time
    if end_time <= start_time:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_time must be after start_time",
        )

    event = await timetable_repo.update(event, **updates)
    return TimetableEvent.model_validate(event)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    current_user: CurrentUser,
    timetable_repo: TimetableRepositoryProtocol = Depends(get_timetable_repository),
) -> None:
    if not await timetable_repo.delete(event_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")

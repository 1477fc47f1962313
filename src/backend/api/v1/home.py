"""
Home feed endpoint.
"""

from fastapi import APIRouter, Depends

from api.deps import CurrentUser
from core.config import settings
from repositories.provider import (
    GroupRepositoryProtocol,
    NoteRepositoryProtocol,
    ProfileRepositoryProtocol,
    get_group_repository,
    get_note_repository,
    get_profile_repository,
)
from schemas.converters import group_to_summary, note_to_schema
from schemas.note import HomeFeed

router = APIRouter()


@router.get("", response_model=HomeFeed)
async def get_home(
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    note_repo: NoteRepositoryProtocol = Depends(get_note_repository),
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
) -> HomeFeed:
    """
    Get the viewer's landing page.

    Returns the viewer's groups plus the newest pinned notes and the newest
    unpinned notes across those groups.
    """
    pairs = await group_repo.list_for_user(current_user.id)
    group_ids = [group.id for group, _ in pairs]

    pinned = await note_repo.list_for_groups(group_ids, pinned=True, limit=settings.HOME_PINNED_LIMIT)
    recent = await note_repo.list_for_groups(group_ids, pinned=False, limit=settings.HOME_RECENT_LIMIT)
    profiles = await profile_repo.get_many(note.created_by for note in [*pinned, *recent])

    return HomeFeed(
        groups=[group_to_summary(group, membership.role) for group, membership in pairs],
        pinned_notes=[note_to_schema(note, profiles) for note in pinned],
        recent_notes=[note_to_schema(note, profiles) for note in recent],
    )

"""
Note search endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import CurrentUser
from core.config import settings
from models.cosmos_documents import NoteTag
from repositories.provider import (
    GroupRepositoryProtocol,
    NoteRepositoryProtocol,
    ProfileRepositoryProtocol,
    get_group_repository,
    get_note_repository,
    get_profile_repository,
)
from schemas.converters import note_to_schema
from schemas.note import StickyNote

router = APIRouter()


@router.get("/notes", response_model=list[StickyNote])
async def search_notes(
    current_user: CurrentUser,
    q: Optional[str] = Query(None, max_length=200),
    tags: list[NoteTag] = Query([]),
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    note_repo: NoteRepositoryProtocol = Depends(get_note_repository),
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
) -> list[StickyNote]:
    """
    Search notes across the viewer's groups.

    q matches a case-insensitive substring of the content; tags match notes
    carrying any of them. At least one of the two is required.
    """
    text = (q or "").strip()
    if not text and not tags:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide a search term or at least one tag",
        )

    pairs = await group_repo.list_for_user(current_user.id)
    group_ids = [group.id for group, _ in pairs]
    if not group_ids:
        return []

    notes = await note_repo.search(
        group_ids,
        text=text or None,
        tags=tags,
        limit=settings.SEARCH_RESULT_LIMIT,
    )
    profiles = await profile_repo.get_many(note.created_by for note in notes)
    return [note_to_schema(note, profiles) for note in notes]

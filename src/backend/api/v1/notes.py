"""
Group sticky note endpoints.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import CurrentUser, can_moderate, load_group_for_member
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
from schemas.note import StickyNote, StickyNoteCreate
from schemas.profile import Viewer

logger = structlog.get_logger(__name__)

router = APIRouter()


async def _load_note_for_moderation(note_id: str, viewer: Viewer, note_repo, group_repo):
    note = await note_repo.find_by_id(note_id)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")

    _, membership = await load_group_for_member(note.group_id, viewer, group_repo)
    if not can_moderate(note.created_by, viewer, membership):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author or a group admin can change this note",
        )
    return note


@router.get("/groups/{group_id}/notes", response_model=list[StickyNote])
async def list_group_notes(
    group_id: str,
    current_user: CurrentUser,
    tag: Optional[NoteTag] = Query(None),
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    note_repo: NoteRepositoryProtocol = Depends(get_note_repository),
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
) -> list[StickyNote]:
    """List a group's notes, pinned first then newest first."""
    await load_group_for_member(group_id, current_user, group_repo)
    notes = await note_repo.list_by_group(group_id, tag=tag)
    profiles = await profile_repo.get_many(note.created_by for note in notes)
    return [note_to_schema(note, profiles) for note in notes]


@router.post(
    "/groups/{group_id}/notes",
    response_model=StickyNote,
    status_code=status.HTTP_201_CREATED,
)
async def create_group_note(
    group_id: str,
    note_data: StickyNoteCreate,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    note_repo: NoteRepositoryProtocol = Depends(get_note_repository),
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
) -> StickyNote:
    """Post a sticky note to a group."""
    await load_group_for_member(group_id, current_user, group_repo)
    note = await note_repo.create(
        group_id=group_id,
        created_by=current_user.id,
        content=note_data.content,
        tags=note_data.tags,
        is_pinned=note_data.is_pinned,
        deadline=note_data.deadline,
    )
    logger.info("note_created", note_id=note.id, group_id=group_id)
    profiles = await profile_repo.get_many([current_user.id])
    return note_to_schema(note, profiles)


@router.post("/notes/{note_id}/pin", response_model=StickyNote)
async def toggle_note_pin(
    note_id: str,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    note_repo: NoteRepositoryProtocol = Depends(get_note_repository),
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
) -> StickyNote:
    """Pin or unpin a note (author or group admin)."""
    note = await _load_note_for_moderation(note_id, current_user, note_repo, group_repo)
    note = await note_repo.set_pinned(note, not note.is_pinned)
    profiles = await profile_repo.get_many([note.created_by])
    return note_to_schema(note, profiles)


@router.delete("/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    note_repo: NoteRepositoryProtocol = Depends(get_note_repository),
) -> None:
    """Delete a note (author or group admin)."""
    note = await _load_note_for_moderation(note_id, current_user, note_repo, group_repo)
    await note_repo.delete(note.id, note.group_id)
    logger.info("note_deleted", note_id=note.id, group_id=note.group_id, user_id=current_user.id)

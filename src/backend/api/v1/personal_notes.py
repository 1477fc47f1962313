"""
Personal notes pad endpoints.

Notes are private: every lookup is scoped to the viewer's own partition,
so another user's note id simply reads as not found.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import CurrentUser
from repositories.provider import PersonalNoteRepositoryProtocol, get_personal_note_repository
from schemas.personal_note import PersonalNote, PersonalNoteCreate, PersonalNoteUpdate

router = APIRouter()


async def _get_own_note(note_id: str, user_id: str, note_repo):
    note = await note_repo.get_by_id(note_id, user_id)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return note


@router.get("", response_model=list[PersonalNote])
async def list_personal_notes(
    current_user: CurrentUser,
    note_repo: PersonalNoteRepositoryProtocol = Depends(get_personal_note_repository),
) -> list[PersonalNote]:
    """List the viewer's notes, pinned first then newest first."""
    notes = await note_repo.list_for_user(current_user.id)
    return [PersonalNote.model_validate(note) for note in notes]


@router.post("", response_model=PersonalNote, status_code=status.HTTP_201_CREATED)
async def create_personal_note(
    note_data: PersonalNoteCreate,
    current_user: CurrentUser,
    note_repo: PersonalNoteRepositoryProtocol = Depends(get_personal_note_repository),
) -> PersonalNote:
    note = await note_repo.create(
        user_id=current_user.id,
        title=note_data.title,
        content=note_data.content,
        color=note_data.color,
        is_pinned=note_data.is_pinned,
    )
    return PersonalNote.model_validate(note)


@router.put("/{note_id}", response_model=PersonalNote)
async def update_personal_note(
    note_id: str,
    note_data: PersonalNoteUpdate,
    current_user: CurrentUser,
    note_repo: PersonalNoteRepositoryProtocol = Depends(get_personal_note_repository),
) -> PersonalNote:
    note = await _get_own_note(note_id, current_user.id, note_repo)
    note = await note_repo.update(note, **note_data.model_dump(exclude_unset=True))
    return PersonalNote.model_validate(note)


@router.post("/{note_id}/pin", response_model=PersonalNote)
async def toggle_personal_note_pin(
    note_id: str,
    current_user: CurrentUser,
    note_repo: PersonalNoteRepositoryProtocol = Depends(get_personal_note_repository),
) -> PersonalNote:
    note = await _get_own_note(note_id, current_user.id, note_repo)
    note = await note_repo.update(note, is_pinned=not note.is_pinned)
    return PersonalNote.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_personal_note(
    note_id: str,
    current_user: CurrentUser,
    note_repo: PersonalNoteRepositoryProtocol = Depends(get_personal_note_repository),
) -> None:
    if not await note_repo.delete(note_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")

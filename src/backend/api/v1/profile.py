"""
Profile endpoints.
"""

from fastapi import APIRouter, Depends

from api.deps import CurrentUser
from repositories.provider import (
    GroupRepositoryProtocol,
    NoteRepositoryProtocol,
    ProfileRepositoryProtocol,
    get_group_repository,
    get_note_repository,
    get_profile_repository,
)
from schemas.converters import profile_to_schema
from schemas.profile import ProfileResponse

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: CurrentUser,
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    note_repo: NoteRepositoryProtocol = Depends(get_note_repository),
) -> ProfileResponse:
    """
    Get the viewer's profile with group and authored-note counts.

    The profile is created from token claims the first time it is requested.
    """
    profile = await profile_repo.ensure(
        current_user.id,
        email=current_user.email,
        display_name=current_user.display_name,
    )
    group_count = await group_repo.count_for_user(current_user.id)
    note_count = await note_repo.count_by_author(current_user.id)
    return profile_to_schema(profile, group_count=group_count, note_count=note_count)

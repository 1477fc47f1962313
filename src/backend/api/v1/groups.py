"""
Study group endpoints.

Only members see a group; only admins add members.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import CurrentUser, load_group_for_member
from core.exceptions import AlreadyMemberError
from models.cosmos_documents import GroupType, MemberRole
from repositories.provider import (
    GroupRepositoryProtocol,
    ProfileRepositoryProtocol,
    get_group_repository,
    get_profile_repository,
)
from schemas.converters import group_to_detail, group_to_summary, member_to_schema
from schemas.group import GroupCreate, GroupDetail, GroupMember, GroupSummary, MemberAdd

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[GroupSummary])
async def list_groups(
    current_user: CurrentUser,
    group_type: Optional[GroupType] = Query(None, alias="type"),
    q: Optional[str] = Query(None, max_length=100, description="Case-insensitive name filter"),
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
) -> list[GroupSummary]:
    """List the viewer's groups, optionally filtered by type and name."""
    pairs = await group_repo.list_for_user(current_user.id)

    if group_type is not None:
        pairs = [(group, member) for group, member in pairs if group.type == group_type.value]

    needle = (q or "").strip().lower()
    if needle:
        pairs = [(group, member) for group, member in pairs if needle in group.name.lower()]

    return [group_to_summary(group, member.role) for group, member in pairs]


@router.post("", response_model=GroupSummary, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
) -> GroupSummary:
    """Create a group. The creator becomes its admin."""
    group = await group_repo.create(
        name=group_data.name,
        created_by=current_user.id,
        description=group_data.description,
        group_type=group_data.type,
    )
    logger.info("group_created", group_id=group.id, user_id=current_user.id)
    return group_to_summary(group, MemberRole.ADMIN)


@router.get("/{group_id}", response_model=GroupDetail)
async def get_group(
    group_id: str,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
) -> GroupDetail:
    """Get a group with its members."""
    group, membership = await load_group_for_member(group_id, current_user, group_repo)
    members = await group_repo.list_members(group_id)
    profiles = await profile_repo.get_many(member.user_id for member in members)
    return group_to_detail(group, membership, members, profiles)


@router.post(
    "/{group_id}/members",
    response_model=GroupMember,
    status_code=status.HTTP_201_CREATED,
)
async def add_member(
    group_id: str,
    member_data: MemberAdd,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    profile_repo: ProfileRepositoryProtocol = Depends(get_profile_repository),
) -> GroupMember:
    """
    Add a registered user to the group by email.

    Requirements:
    - Viewer must be an admin of the group
    - The email must belong to an existing profile
    - The user must not already be a member
    """
    _, membership = await load_group_for_member(group_id, current_user, group_repo)
    if not membership.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only group admins can add members",
        )

    profile = await profile_repo.get_by_email(member_data.email)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No user found with that email",
        )

    try:
        member = await group_repo.add_member(group_id, profile.id)
    except AlreadyMemberError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User is already a member of this group",
        )

    logger.info("group_member_added", group_id=group_id, user_id=profile.id, added_by=current_user.id)
    return member_to_schema(member, profile)

"""
Shared dependencies for API endpoints.

Includes:
- Viewer authentication from identity-provider bearer tokens
- Group access checks shared by group, note and poll routes
"""

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.security import decode_token
from models.cosmos_documents import GroupDocument, GroupMemberDocument
from schemas.profile import Viewer

logger = structlog.get_logger(__name__)

# Security scheme; a missing header is reported as 401 below rather than 403
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# =============================================================================
# Viewer Authentication (JWT-based)
# =============================================================================


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Viewer:
    """
    Extract and validate the viewer from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or has no subject.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("token_without_subject")
        raise _unauthorized("Invalid token payload")

    metadata = payload.get("user_metadata") or {}
    return Viewer(
        id=str(user_id),
        email=payload.get("email"),
        display_name=metadata.get("display_name") or payload.get("name"),
    )


CurrentUser = Annotated[Viewer, Depends(get_current_user)]


# =============================================================================
# Group Access
# =============================================================================


async def load_group_for_member(
    group_id: str,
    viewer: Viewer,
    group_repo,
) -> tuple[GroupDocument, GroupMemberDocument]:
    """
    Load a group the viewer may see, with the viewer's membership.

    A creator whose own membership row has gone missing is re-added as admin.

    Raises:
        HTTPException: 404 if the group does not exist or the viewer is not in it.
    """
    group = await group_repo.get_by_id(group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")

    membership = await group_repo.get_membership(group_id, viewer.id)
    if membership is None:
        if group.created_by != viewer.id:
            # Non-members get the same answer as a missing group
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
        membership = await group_repo.ensure_admin(group_id, viewer.id)

    return group, membership


def can_moderate(author_id: str, viewer: Viewer, membership: GroupMemberDocument) -> bool:
    """Authors manage their own content; group admins manage everyone's."""
    return author_id == viewer.id or membership.is_admin

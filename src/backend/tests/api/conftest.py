"""
Fixtures shared by the API endpoint tests.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from models.cosmos_documents import GroupDocument, GroupMemberDocument, MemberRole

CREATED_AT = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def group_doc() -> GroupDocument:
    """A group created by someone other than the viewer."""
    return GroupDocument(
        id="group-1",
        name="Linear Algebra",
        description="MATH 221 study group",
        created_by="owner-1",
        created_at=CREATED_AT,
    )


@pytest.fixture
def join_group(repos: dict[str, AsyncMock], group_doc: GroupDocument, viewer):
    """Make the viewer a member of group_doc with the given role."""

    def _join(role: MemberRole = MemberRole.MEMBER) -> GroupMemberDocument:
        membership = GroupMemberDocument(
            id=GroupMemberDocument.make_id(group_doc.id, viewer.id),
            group_id=group_doc.id,
            user_id=viewer.id,
            role=role,
            joined_at=CREATED_AT,
        )
        repos["group"].get_by_id.return_value = group_doc
        repos["group"].get_membership.return_value = membership
        return membership

    return _join


@pytest.fixture
def outsider(repos: dict[str, AsyncMock], group_doc: GroupDocument) -> None:
    """The group exists but the viewer is not in it."""
    repos["group"].get_by_id.return_value = group_doc
    repos["group"].get_membership.return_value = None

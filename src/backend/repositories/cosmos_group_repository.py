"""
Cosmos DB Group repository.

Groups live in the 'groups' container (partition /id); membership rows live
in 'group-members' (partition /group_id) with an id derived from the pair,
so inserting the same member twice conflicts in the store.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from azure.cosmos.exceptions import CosmosResourceExistsError

from core.exceptions import AlreadyMemberError
from db.cosmos_session import (
    GROUP_MEMBERS_CONTAINER,
    GROUPS_CONTAINER,
    create_item,
    query_count,
    query_items,
    read_item,
    upsert_item,
)
from models.cosmos_documents import (
    GroupDocument,
    GroupMemberDocument,
    GroupType,
    MemberRole,
)

logger = logging.getLogger(__name__)


class CosmosGroupRepository:
    """Repository for groups and their memberships using Cosmos DB."""

    # ========================================================================
    # Groups
    # ========================================================================

    async def get_by_id(self, group_id: str) -> Optional[GroupDocument]:
        data = await read_item(GROUPS_CONTAINER, group_id, partition_key=group_id)
        if data is None:
            return None
        return GroupDocument(**data)

    async def create(
        self,
        name: str,
        created_by: str,
        description: Optional[str] = None,
        group_type: GroupType = GroupType.CLASS,
    ) -> GroupDocument:
        """Create a group and insert its creator as an admin member."""
        group = GroupDocument(
            name=name,
            description=description,
            type=group_type,
            created_by=created_by,
        )
        await create_item(GROUPS_CONTAINER, group.model_dump(mode="json"))

        try:
            await self.add_member(group.id, created_by, role=MemberRole.ADMIN)
        except AlreadyMemberError:
            logger.debug(f"Creator {created_by} already a member of group {group.id}")

        logger.info(f"Created group {group.id} by {created_by}")
        return group

    async def list_for_user(self, user_id: str) -> list[tuple[GroupDocument, GroupMemberDocument]]:
        """
        Get the groups a user belongs to, paired with the user's membership.

        Newest membership first. Memberships whose group no longer exists
        are skipped.
        """
        memberships = await self.list_memberships(user_id)
        pairs: list[tuple[GroupDocument, GroupMemberDocument]] = []
        for membership in memberships:
            group = await self.get_by_id(membership.group_id)
            if group is not None:
                pairs.append((group, membership))
        return pairs

    # ========================================================================
    # Memberships
    # ========================================================================

    async def get_membership(self, group_id: str, user_id: str) -> Optional[GroupMemberDocument]:
        """Point read of a single membership row."""
        data = await read_item(
            GROUP_MEMBERS_CONTAINER,
            GroupMemberDocument.make_id(group_id, user_id),
            partition_key=group_id,
        )
        if data is None:
            return None
        return GroupMemberDocument(**data)

    async def list_memberships(self, user_id: str) -> list[GroupMemberDocument]:
        """All memberships of a user (cross-partition)."""
        results = await query_items(
            GROUP_MEMBERS_CONTAINER,
            "SELECT * FROM c WHERE c.user_id = @user_id ORDER BY c.joined_at DESC",
            parameters=[{"name": "@user_id", "value": user_id}],
        )
        return [GroupMemberDocument(**item) for item in results]

    async def list_members(self, group_id: str) -> list[GroupMemberDocument]:
        """Members of one group, in join order."""
        results = await query_items(
            GROUP_MEMBERS_CONTAINER,
            "SELECT * FROM c WHERE c.group_id = @group_id ORDER BY c.joined_at ASC",
            parameters=[{"name": "@group_id", "value": group_id}],
            partition_key=group_id,
        )
        return [GroupMemberDocument(**item) for item in results]

    async def add_member(
        self,
        group_id: str,
        user_id: str,
        role: MemberRole = MemberRole.MEMBER,
    ) -> GroupMemberDocument:
        """
        Insert a membership row.

        Raises:
            AlreadyMemberError: The user already belongs to the group.
        """
        member = GroupMemberDocument(
            id=GroupMemberDocument.make_id(group_id, user_id),
            group_id=group_id,
            user_id=user_id,
            role=role,
            joined_at=datetime.now(timezone.utc),
        )
        try:
            await create_item(GROUP_MEMBERS_CONTAINER, member.model_dump(mode="json"))
        except CosmosResourceExistsError as e:
            raise AlreadyMemberError(group_id, user_id) from e

        logger.debug(f"Added {user_id} to group {group_id} as {member.role}")
        return member

    async def ensure_admin(self, group_id: str, user_id: str) -> GroupMemberDocument:
        """Upsert an admin membership row (used to repair a creator's lost row)."""
        member = GroupMemberDocument(
            id=GroupMemberDocument.make_id(group_id, user_id),
            group_id=group_id,
            user_id=user_id,
            role=MemberRole.ADMIN,
        )
        await upsert_item(GROUP_MEMBERS_CONTAINER, member.model_dump(mode="json"))
        logger.info(f"Restored admin membership of {user_id} in group {group_id}")
        return member

    async def count_for_user(self, user_id: str) -> int:
        return await query_count(
            GROUP_MEMBERS_CONTAINER,
            "SELECT VALUE COUNT(1) FROM c WHERE c.user_id = @user_id",
            parameters=[{"name": "@user_id", "value": user_id}],
        )

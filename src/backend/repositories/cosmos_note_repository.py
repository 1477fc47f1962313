"""
Cosmos DB Sticky Note repository.

Notes are partitioned by group_id; feeds that span the viewer's groups run
cross-partition with the group ids passed as a parameter array.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from db.cosmos_session import (
    STICKY_NOTES_CONTAINER,
    create_item,
    delete_item,
    query_count,
    query_items,
    read_item,
    upsert_item,
)
from models.cosmos_documents import NoteTag, StickyNoteDocument

logger = logging.getLogger(__name__)


def pinned_first(notes: list[StickyNoteDocument]) -> list[StickyNoteDocument]:
    """Stable re-order of a newest-first list so pinned notes lead."""
    return sorted(notes, key=lambda note: not note.is_pinned)


class CosmosNoteRepository:
    """Repository for group sticky notes using Cosmos DB."""

    # ========================================================================
    # Read Operations
    # ========================================================================

    async def get_by_id(self, note_id: str, group_id: str) -> Optional[StickyNoteDocument]:
        data = await read_item(STICKY_NOTES_CONTAINER, note_id, partition_key=group_id)
        if data is None:
            return None
        return StickyNoteDocument(**data)

    async def find_by_id(self, note_id: str) -> Optional[StickyNoteDocument]:
        """Look up a note when its group is not known (cross-partition)."""
        results = await query_items(
            STICKY_NOTES_CONTAINER,
            "SELECT * FROM c WHERE c.id = @id",
            parameters=[{"name": "@id", "value": note_id}],
            max_items=1,
        )
        if not results:
            return None
        return StickyNoteDocument(**results[0])

    async def list_by_group(
        self,
        group_id: str,
        tag: Optional[NoteTag | str] = None,
    ) -> list[StickyNoteDocument]:
        """Notes in a group, pinned first then newest first, optionally filtered by tag."""
        query = "SELECT * FROM c WHERE c.group_id = @group_id"
        parameters: list[dict[str, Any]] = [{"name": "@group_id", "value": group_id}]
        if tag:
            query += " AND ARRAY_CONTAINS(c.tags, @tag)"
            parameters.append({"name": "@tag", "value": NoteTag(tag).value})
        query += " ORDER BY c.created_at DESC"

        results = await query_items(
            STICKY_NOTES_CONTAINER,
            query,
            parameters=parameters,
            partition_key=group_id,
        )
        return pinned_first([StickyNoteDocument(**item) for item in results])

    async def list_for_groups(
        self,
        group_ids: Sequence[str],
        pinned: bool,
        limit: int,
    ) -> list[StickyNoteDocument]:
        """Newest notes across several groups with the given pin state."""
        if not group_ids:
            return []

        results = await query_items(
            STICKY_NOTES_CONTAINER,
            """
            SELECT * FROM c
            WHERE ARRAY_CONTAINS(@group_ids, c.group_id)
              AND c.is_pinned = @pinned
            ORDER BY c.created_at DESC
            """,
            parameters=[
                {"name": "@group_ids", "value": list(group_ids)},
                {"name": "@pinned", "value": pinned},
            ],
            max_items=limit,
        )
        return [StickyNoteDocument(**item) for item in results]

    async def search(
        self,
        group_ids: Sequence[str],
        text: Optional[str] = None,
        tags: Optional[Sequence[NoteTag | str]] = None,
        limit: int = 20,
    ) -> list[StickyNoteDocument]:
        """
        Search notes in the given groups, newest first.

        text matches a case-insensitive substring of the content; tags match
        notes carrying any of them. When both are given both must hold.
        """
        if not group_ids:
            return []

        query = "SELECT * FROM c WHERE ARRAY_CONTAINS(@group_ids, c.group_id)"
        parameters: list[dict[str, Any]] = [{"name": "@group_ids", "value": list(group_ids)}]
        if text:
            query += " AND CONTAINS(c.content, @text, true)"
            parameters.append({"name": "@text", "value": text})
        if tags:
            query += " AND EXISTS(SELECT VALUE t FROM t IN c.tags WHERE ARRAY_CONTAINS(@tags, t))"
            parameters.append({"name": "@tags", "value": [NoteTag(tag).value for tag in tags]})
        query += " ORDER BY c.created_at DESC"

        results = await query_items(
            STICKY_NOTES_CONTAINER,
            query,
            parameters=parameters,
            max_items=limit,
        )
        return [StickyNoteDocument(**item) for item in results]

    async def count_by_author(self, user_id: str) -> int:
        return await query_count(
            STICKY_NOTES_CONTAINER,
            "SELECT VALUE COUNT(1) FROM c WHERE c.created_by = @user_id",
            parameters=[{"name": "@user_id", "value": user_id}],
        )

    # ========================================================================
    # Write Operations
    # ========================================================================

    async def create(
        self,
        group_id: str,
        created_by: str,
        content: str,
        tags: Optional[Sequence[NoteTag | str]] = None,
        is_pinned: bool = False,
        deadline: Optional[datetime] = None,
    ) -> StickyNoteDocument:
        note = StickyNoteDocument(
            group_id=group_id,
            created_by=created_by,
            content=content,
            tags=list(dict.fromkeys(NoteTag(tag) for tag in tags or [])),
            is_pinned=is_pinned,
            deadline=deadline,
        )
        await create_item(STICKY_NOTES_CONTAINER, note.model_dump(mode="json"))
        logger.debug(f"Created note {note.id} in group {group_id}")
        return note

    async def set_pinned(self, note: StickyNoteDocument, is_pinned: bool) -> StickyNoteDocument:
        note.is_pinned = is_pinned
        note.updated_at = datetime.now(timezone.utc)
        await upsert_item(STICKY_NOTES_CONTAINER, note.model_dump(mode="json"))
        return note

    async def delete(self, note_id: str, group_id: str) -> bool:
        deleted = await delete_item(STICKY_NOTES_CONTAINER, note_id, partition_key=group_id)
        if deleted:
            logger.debug(f"Deleted note {note_id} from group {group_id}")
        return deleted

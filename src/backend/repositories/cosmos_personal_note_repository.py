"""
Cosmos DB Personal Note repository.

Personal notes are private to their owner and partitioned by user_id, so
every read is scoped to the owner's partition.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from db.cosmos_session import (
    PERSONAL_NOTES_CONTAINER,
    create_item,
    delete_item,
    query_items,
    read_item,
    upsert_item,
)
from models.cosmos_documents import NoteColor, PersonalNoteDocument

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("title", "content", "color", "is_pinned")


class CosmosPersonalNoteRepository:
    """Repository for personal notes using Cosmos DB."""

    async def get_by_id(self, note_id: str, user_id: str) -> Optional[PersonalNoteDocument]:
        data = await read_item(PERSONAL_NOTES_CONTAINER, note_id, partition_key=user_id)
        if data is None:
            return None
        return PersonalNoteDocument(**data)

    async def list_for_user(self, user_id: str) -> list[PersonalNoteDocument]:
        """Owner's notes, pinned first then newest first."""
        results = await query_items(
            PERSONAL_NOTES_CONTAINER,
            "SELECT * FROM c WHERE c.user_id = @user_id ORDER BY c.created_at DESC",
            parameters=[{"name": "@user_id", "value": user_id}],
            partition_key=user_id,
        )
        notes = [PersonalNoteDocument(**item) for item in results]
        return sorted(notes, key=lambda note: not note.is_pinned)

    async def create(
        self,
        user_id: str,
        title: str,
        content: str,
        color: NoteColor = NoteColor.YELLOW,
        is_pinned: bool = False,
    ) -> PersonalNoteDocument:
        note = PersonalNoteDocument(
            user_id=user_id,
            title=title,
            content=content,
            color=color,
            is_pinned=is_pinned,
        )
        await create_item(PERSONAL_NOTES_CONTAINER, note.model_dump(mode="json"))
        return note

    async def update(self, note: PersonalNoteDocument, **updates) -> PersonalNoteDocument:
        """Apply field updates to a note the caller has already loaded."""
        for field in _UPDATABLE_FIELDS:
            if field in updates and updates[field] is not None:
                value = updates[field]
                setattr(note, field, value.value if isinstance(value, NoteColor) else value)
        note.updated_at = datetime.now(timezone.utc)

        await upsert_item(PERSONAL_NOTES_CONTAINER, note.model_dump(mode="json"))
        return note

    async def delete(self, note_id: str, user_id: str) -> bool:
        deleted = await delete_item(PERSONAL_NOTES_CONTAINER, note_id, partition_key=user_id)
        if deleted:
            logger.debug(f"Deleted personal note {note_id}")
        return deleted

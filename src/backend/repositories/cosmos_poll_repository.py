"""
Cosmos DB Poll repository.

Polls are partitioned by group_id; a poll's options are fixed when it is
created and never edited.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

from db.cosmos_session import (
    POLLS_CONTAINER,
    create_item,
    query_items,
    read_item,
)
from models.cosmos_documents import PollDocument

logger = logging.getLogger(__name__)


class CosmosPollRepository:
    """Repository for group polls using Cosmos DB."""

    async def get_by_id(self, poll_id: str, group_id: str) -> Optional[PollDocument]:
        data = await read_item(POLLS_CONTAINER, poll_id, partition_key=group_id)
        if data is None:
            return None
        return PollDocument(**data)

    async def find_by_id(self, poll_id: str) -> Optional[PollDocument]:
        """Look up a poll when its group is not known (cross-partition)."""
        results = await query_items(
            POLLS_CONTAINER,
            "SELECT * FROM c WHERE c.id = @id",
            parameters=[{"name": "@id", "value": poll_id}],
            max_items=1,
        )
        if not results:
            return None
        return PollDocument(**results[0])

    async def list_by_group(self, group_id: str) -> list[PollDocument]:
        """Polls in a group, newest first."""
        results = await query_items(
            POLLS_CONTAINER,
            "SELECT * FROM c WHERE c.group_id = @group_id ORDER BY c.created_at DESC",
            parameters=[{"name": "@group_id", "value": group_id}],
            partition_key=group_id,
        )
        return [PollDocument(**item) for item in results]

    async def create(
        self,
        group_id: str,
        created_by: str,
        question: str,
        options: Sequence[str],
        is_anonymous: bool = False,
        closes_at: Optional[datetime] = None,
    ) -> PollDocument:
        poll = PollDocument(
            group_id=group_id,
            created_by=created_by,
            question=question,
            options=list(options),
            is_anonymous=is_anonymous,
            closes_at=closes_at,
        )
        await create_item(POLLS_CONTAINER, poll.model_dump(mode="json"))
        logger.info(f"Created poll {poll.id} in group {group_id} with {len(poll.options)} options")
        return poll

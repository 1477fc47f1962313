"""
Cosmos DB Vote repository.

Votes are insert-only and partitioned by poll_id. Each vote's id is
derived from (user_id, poll_id), so the store itself refuses a second
vote by the same user even when two submissions race.
"""

import logging

from azure.cosmos.exceptions import CosmosResourceExistsError

from core.exceptions import AlreadyVotedError
from db.cosmos_session import (
    VOTES_CONTAINER,
    create_item,
    query_items,
)
from models.cosmos_documents import VoteDocument

logger = logging.getLogger(__name__)


class CosmosVoteRepository:
    """Repository for poll votes using Cosmos DB."""

    # ========================================================================
    # Read Operations
    # ========================================================================

    async def list_by_poll(self, poll_id: str) -> list[VoteDocument]:
        """All votes on a poll, oldest first (single-partition query)."""
        results = await query_items(
            VOTES_CONTAINER,
            "SELECT * FROM c WHERE c.poll_id = @poll_id ORDER BY c.created_at ASC",
            parameters=[{"name": "@poll_id", "value": poll_id}],
            partition_key=poll_id,
        )
        return [VoteDocument(**item) for item in results]

    # ========================================================================
    # Write Operations
    # ========================================================================

    async def create(self, vote: VoteDocument) -> VoteDocument:
        """
        Persist a vote.

        Raises:
            AlreadyVotedError: The store already holds a vote with this id,
                i.e. the same user voted on this poll concurrently.
        """
        try:
            await create_item(VOTES_CONTAINER, vote.model_dump(mode="json"))
        except CosmosResourceExistsError as e:
            logger.info(f"Rejected duplicate vote on poll {vote.poll_id}")
            raise AlreadyVotedError(vote.poll_id, vote.user_id) from e

        logger.debug(f"Created vote on poll {vote.poll_id}")
        return vote

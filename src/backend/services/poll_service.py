"""
Poll voting service.

Glues the tally engine to the vote store: fetch the poll's votes, let the
engine validate and build the new vote, persist it under its deterministic
key, and return the updated vote list for display.
"""

import structlog

from core.security import generate_vote_key
from engines.poll_tally import submit_vote
from models.cosmos_documents import PollDocument, VoteDocument

logger = structlog.get_logger(__name__)


class PollService:
    def __init__(self, vote_repo):
        self.vote_repo = vote_repo

    async def cast_vote(
        self,
        poll: PollDocument,
        viewer_id: str,
        option_index: int,
    ) -> list[VoteDocument]:
        """
        Record the viewer's vote and return all votes including it.

        Raises:
            AlreadyVotedError: The viewer already voted, detected locally or
                by the store's uniqueness constraint.
            InvalidOptionError: option_index is out of range.
        """
        votes = await self.vote_repo.list_by_poll(poll.id)
        vote = submit_vote(
            poll,
            votes,
            viewer_id,
            option_index,
            vote_id=generate_vote_key(viewer_id, poll.id),
        )
        await self.vote_repo.create(vote)

        logger.info("vote_cast", poll_id=poll.id, option_index=option_index)
        return [*votes, vote]

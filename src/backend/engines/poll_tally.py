"""
Poll tally engine.

Pure functions over a poll's option list and its already-fetched votes:
per-option counts and percentages, the viewer's own vote, and the
one-vote-per-user pre-check done before a vote is persisted.

The pre-check is optimistic. Two near-simultaneous submissions can both
pass it; the store's uniqueness constraint decides, and a rejection there
is reported as AlreadyVotedError just like a local one.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel

from core.exceptions import AlreadyVotedError, InvalidOptionError
from models.cosmos_documents import PollDocument, VoteDocument


class PollTally(BaseModel):
    """Per-option vote summary, indexed by option position."""

    counts: list[int]
    total: int
    percentages: list[int]

    model_config = {"frozen": True}


def percentage(count: int, total: int) -> int:
    """
    Integer percentage of count over total, rounded half up.

    Uses exact integer arithmetic so results never depend on float rounding.
    """
    if total <= 0:
        return 0
    return (200 * count + total) // (2 * total)


def tally(options: Sequence[str], votes: Sequence[VoteDocument]) -> PollTally:
    """
    Count votes per option.

    total is the number of votes supplied; a vote pointing outside the
    option list counts toward total but toward no option.
    """
    counts = [0] * len(options)
    for vote in votes:
        if 0 <= vote.option_index < len(counts):
            counts[vote.option_index] += 1

    total = len(votes)
    return PollTally(
        counts=counts,
        total=total,
        percentages=[percentage(count, total) for count in counts],
    )


def viewer_vote(votes: Sequence[VoteDocument], viewer_id: str) -> Optional[VoteDocument]:
    """Return the viewer's vote, if any."""
    return next((vote for vote in votes if vote.user_id == viewer_id), None)


def can_vote(votes: Sequence[VoteDocument], viewer_id: str) -> bool:
    return viewer_vote(votes, viewer_id) is None


def submit_vote(
    poll: PollDocument,
    votes: Sequence[VoteDocument],
    viewer_id: str,
    option_index: int,
    vote_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> VoteDocument:
    """
    Build the viewer's vote after checking it is allowed.

    The input votes are never modified; the caller persists the returned
    vote and appends it for display.

    Raises:
        AlreadyVotedError: The viewer already voted on this poll.
        InvalidOptionError: option_index is outside [0, len(poll.options)).
    """
    if not can_vote(votes, viewer_id):
        raise AlreadyVotedError(poll.id, viewer_id)

    if not 0 <= option_index < len(poll.options):
        raise InvalidOptionError(option_index, len(poll.options))

    return VoteDocument(
        id=vote_id or str(uuid4()),
        poll_id=poll.id,
        user_id=viewer_id,
        option_index=option_index,
        created_at=now or datetime.now(timezone.utc),
    )

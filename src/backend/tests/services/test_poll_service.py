"""Tests for the poll voting service."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from core.exceptions import AlreadyVotedError, InvalidOptionError
from core.security import generate_vote_key
from models.cosmos_documents import PollDocument, VoteDocument
from repositories.cosmos_vote_repository import CosmosVoteRepository
from services.poll_service import PollService


@pytest.fixture
def poll() -> PollDocument:
    return PollDocument(
        id="poll-1",
        group_id="group-1",
        created_by="owner-1",
        question="Which topic first?",
        options=["Graphs", "Trees"],
    )


@pytest.fixture
def vote_repo() -> AsyncMock:
    repo = AsyncMock(spec=CosmosVoteRepository)
    repo.list_by_poll.return_value = [
        VoteDocument(
            id="v-2",
            poll_id="poll-1",
            user_id="user-2",
            option_index=0,
            created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
    ]
    return repo


@pytest.mark.unit
class TestPollService:
    async def test_cast_vote_appends_new_vote(self, poll, vote_repo):
        votes = await PollService(vote_repo).cast_vote(poll, "user-1", 1)

        assert [v.user_id for v in votes] == ["user-2", "user-1"]
        new_vote = votes[-1]
        assert new_vote.id == generate_vote_key("user-1", "poll-1")
        assert new_vote.option_index == 1
        vote_repo.create.assert_awaited_once_with(new_vote)

    async def test_existing_vote_rejected_before_write(self, poll, vote_repo):
        with pytest.raises(AlreadyVotedError):
            await PollService(vote_repo).cast_vote(poll, "user-2", 1)

        vote_repo.create.assert_not_called()

    async def test_invalid_option_rejected_before_write(self, poll, vote_repo):
        with pytest.raises(InvalidOptionError):
            await PollService(vote_repo).cast_vote(poll, "user-1", 2)

        vote_repo.create.assert_not_called()

    async def test_store_conflict_propagates(self, poll, vote_repo):
        vote_repo.create.side_effect = AlreadyVotedError("poll-1", "user-1")

        with pytest.raises(AlreadyVotedError):
            await PollService(vote_repo).cast_vote(poll, "user-1", 0)

"""Tests for the schema converters."""

from datetime import datetime, timezone

import pytest

from engines.calculator import Calculator
from models.cosmos_documents import (
    GroupDocument,
    GroupMemberDocument,
    MemberRole,
    PollDocument,
    ProfileDocument,
    StickyNoteDocument,
    VoteDocument,
)
from schemas.converters import (
    calculator_to_schema,
    group_to_detail,
    note_to_schema,
    poll_to_results_schema,
    profile_to_schema,
)

AT = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def vote(user_id: str, option_index: int) -> VoteDocument:
    return VoteDocument(id=f"v-{user_id}", poll_id="poll-1", user_id=user_id, option_index=option_index, created_at=AT)


@pytest.mark.unit
class TestPollToResultsSchema:
    @pytest.fixture
    def poll(self):
        return PollDocument(
            id="poll-1",
            group_id="group-1",
            created_by="owner-1",
            question="Lab partner system?",
            options=["Fixed", "Rotating", "Random"],
            created_at=AT,
        )

    def test_counts_and_percentages(self, poll):
        result = poll_to_results_schema(poll, [vote("a", 0), vote("b", 0), vote("c", 2)], "a")

        assert [o.vote_count for o in result.options] == [2, 0, 1]
        assert [o.vote_percentage for o in result.options] == [67, 0, 33]
        assert result.total_votes == 3
        assert result.has_voted is True
        assert result.viewer_option_index == 0

    def test_percentages_of_no_votes(self, poll):
        result = poll_to_results_schema(poll, [], "a")

        assert [o.vote_percentage for o in result.options] == [0, 0, 0]
        assert result.has_voted is False

    def test_voters_listed_when_public(self, poll):
        result = poll_to_results_schema(poll, [vote("a", 1), vote("b", 1)], "z")

        assert result.options[1].voters == ["a", "b"]
        assert result.options[0].voters == []

    def test_voters_hidden_when_anonymous(self, poll):
        poll.is_anonymous = True

        result = poll_to_results_schema(poll, [vote("a", 1)], "a")

        assert all(o.voters is None for o in result.options)
        assert result.viewer_option_index == 1


@pytest.mark.unit
class TestOtherConverters:
    def test_group_detail_members(self):
        group = GroupDocument(id="g1", name="Thermo", created_by="owner-1", created_at=AT)
        viewer_row = GroupMemberDocument(id="g1:user-1", group_id="g1", user_id="user-1", role=MemberRole.ADMIN)
        other_row = GroupMemberDocument(id="g1:user-2", group_id="g1", user_id="user-2")
        profiles = {"user-1": ProfileDocument(id="user-1", display_name="ada lovelace")}

        detail = group_to_detail(group, viewer_row, [viewer_row, other_row], profiles)

        assert detail.viewer_role == MemberRole.ADMIN
        assert detail.members[0].initials == "AL"
        assert detail.members[1].display_name is None
        assert detail.members[1].initials == "?"

    def test_note_without_known_author(self):
        note = StickyNoteDocument(id="n1", group_id="g1", created_by="ghost", content="Hi", created_at=AT)

        assert note_to_schema(note, {}).author_name is None

    def test_profile_counts(self):
        profile = ProfileDocument(id="user-1", email="a@example.com", display_name="Ada")

        schema = profile_to_schema(profile, group_count=2, note_count=5)

        assert schema.initials == "A"
        assert (schema.group_count, schema.note_count) == (2, 5)

    def test_calculator_state(self):
        calc = Calculator(memory=2.5).run(["9", "/"])

        state = calculator_to_schema(calc)

        assert state.display == "9"
        assert state.accumulator == "9"
        assert state.pending_operation == "/"
        assert state.awaiting_new_operand is True
        assert state.memory == "2.5"
        assert state.history == []

"""
Schema converter functions.

Single place for turning Cosmos documents and engine state into response
schemas, so every route shapes the same record the same way.
"""

from typing import Mapping, Optional, Sequence

from engines.calculator import Calculator, format_number
from engines.poll_tally import tally, viewer_vote
from models.cosmos_documents import (
    GroupDocument,
    GroupMemberDocument,
    MemberRole,
    PollDocument,
    ProfileDocument,
    StickyNoteDocument,
    VoteDocument,
)
from schemas.calculator import CalculatorState
from schemas.group import GroupDetail, GroupMember, GroupSummary
from schemas.note import StickyNote
from schemas.poll import PollOptionResult, PollWithResults
from schemas.profile import ProfileResponse


def group_to_summary(group: GroupDocument, role: MemberRole | str) -> GroupSummary:
    return GroupSummary(
        id=group.id,
        name=group.name,
        description=group.description,
        type=group.type,
        role=role,
        created_at=group.created_at,
    )


def member_to_schema(member: GroupMemberDocument, profile: Optional[ProfileDocument]) -> GroupMember:
    return GroupMember(
        user_id=member.user_id,
        role=member.role,
        display_name=profile.display_name if profile else None,
        email=profile.email if profile else None,
        initials=profile.initials if profile else "?",
        joined_at=member.joined_at,
    )


def group_to_detail(
    group: GroupDocument,
    viewer_membership: GroupMemberDocument,
    members: Sequence[GroupMemberDocument],
    profiles: Mapping[str, ProfileDocument],
) -> GroupDetail:
    return GroupDetail(
        id=group.id,
        name=group.name,
        description=group.description,
        type=group.type,
        created_by=group.created_by,
        created_at=group.created_at,
        viewer_role=viewer_membership.role,
        members=[member_to_schema(member, profiles.get(member.user_id)) for member in members],
    )


def note_to_schema(note: StickyNoteDocument, profiles: Mapping[str, ProfileDocument]) -> StickyNote:
    author = profiles.get(note.created_by)
    return StickyNote(
        id=note.id,
        group_id=note.group_id,
        content=note.content,
        tags=note.tags,
        is_pinned=note.is_pinned,
        deadline=note.deadline,
        created_by=note.created_by,
        author_name=author.display_name if author else None,
        created_at=note.created_at,
    )


def profile_to_schema(profile: ProfileDocument, group_count: int = 0, note_count: int = 0) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        email=profile.email,
        phone=profile.phone,
        display_name=profile.display_name,
        avatar_url=profile.avatar_url,
        initials=profile.initials,
        group_count=group_count,
        note_count=note_count,
    )


def poll_to_results_schema(
    poll: PollDocument,
    votes: Sequence[VoteDocument],
    viewer_id: str,
) -> PollWithResults:
    """
    Convert a poll and its votes to the results view for one viewer.

    Voter ids per option are only exposed when the poll is not anonymous.
    """
    summary = tally(poll.options, votes)
    own_vote = viewer_vote(votes, viewer_id)

    options = []
    for index, text in enumerate(poll.options):
        voters = None
        if not poll.is_anonymous:
            voters = [vote.user_id for vote in votes if vote.option_index == index]
        options.append(
            PollOptionResult(
                index=index,
                text=text,
                vote_count=summary.counts[index],
                vote_percentage=summary.percentages[index],
                voters=voters,
            )
        )

    return PollWithResults(
        id=poll.id,
        group_id=poll.group_id,
        question=poll.question,
        created_by=poll.created_by,
        is_anonymous=poll.is_anonymous,
        closes_at=poll.closes_at,
        created_at=poll.created_at,
        options=options,
        total_votes=summary.total,
        has_voted=own_vote is not None,
        viewer_option_index=own_vote.option_index if own_vote else None,
    )


def calculator_to_schema(calculator: Calculator) -> CalculatorState:
    accumulator = calculator.accumulator
    pending = calculator.pending_operation
    return CalculatorState(
        display=calculator.display,
        accumulator=format_number(accumulator) if accumulator is not None else None,
        pending_operation=pending.value if pending is not None else None,
        awaiting_new_operand=calculator.awaiting_new_operand,
        memory=format_number(calculator.memory),
        history=calculator.history,
    )

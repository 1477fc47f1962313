"""
Group poll endpoints.

Results are derived from the recorded votes on every read; the tally
engine enforces one vote per user and the vote store backs it up.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import CurrentUser, load_group_for_member
from core.exceptions import AlreadyVotedError, InvalidOptionError
from repositories.provider import (
    GroupRepositoryProtocol,
    PollRepositoryProtocol,
    VoteRepositoryProtocol,
    get_group_repository,
    get_poll_repository,
    get_vote_repository,
)
from schemas.converters import poll_to_results_schema
from schemas.poll import PollCreate, PollWithResults, VoteCreate
from services.poll_service import PollService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/groups/{group_id}/polls", response_model=list[PollWithResults])
async def list_group_polls(
    group_id: str,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    poll_repo: PollRepositoryProtocol = Depends(get_poll_repository),
    vote_repo: VoteRepositoryProtocol = Depends(get_vote_repository),
) -> list[PollWithResults]:
    """List a group's polls, newest first, each with live results."""
    await load_group_for_member(group_id, current_user, group_repo)

    results = []
    for poll in await poll_repo.list_by_group(group_id):
        votes = await vote_repo.list_by_poll(poll.id)
        results.append(poll_to_results_schema(poll, votes, current_user.id))
    return results


@router.post(
    "/groups/{group_id}/polls",
    response_model=PollWithResults,
    status_code=status.HTTP_201_CREATED,
)
async def create_group_poll(
    group_id: str,
    poll_data: PollCreate,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    poll_repo: PollRepositoryProtocol = Depends(get_poll_repository),
) -> PollWithResults:
    """Create a poll in a group. Options are fixed from here on."""
    await load_group_for_member(group_id, current_user, group_repo)
    poll = await poll_repo.create(
        group_id=group_id,
        created_by=current_user.id,
        question=poll_data.question,
        options=poll_data.options,
        is_anonymous=poll_data.is_anonymous,
        closes_at=poll_data.closes_at,
    )
    logger.info("poll_created", poll_id=poll.id, group_id=group_id, options=len(poll.options))
    return poll_to_results_schema(poll, [], current_user.id)


@router.post(
    "/polls/{poll_id}/votes",
    response_model=PollWithResults,
    status_code=status.HTTP_201_CREATED,
)
async def cast_vote(
    poll_id: str,
    vote_data: VoteCreate,
    current_user: CurrentUser,
    group_repo: GroupRepositoryProtocol = Depends(get_group_repository),
    poll_repo: PollRepositoryProtocol = Depends(get_poll_repository),
    vote_repo: VoteRepositoryProtocol = Depends(get_vote_repository),
) -> PollWithResults:
    """
    Cast the viewer's vote and return the updated results.

    Requirements:
    - Viewer must be a member of the poll's group
    - Viewer cannot vote twice on the same poll (409)
    - option_index must address one of the poll's options (400)
    """
    poll = await poll_repo.find_by_id(poll_id)
    if poll is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Poll not found")

    await load_group_for_member(poll.group_id, current_user, group_repo)

    try:
        votes = await PollService(vote_repo).cast_vote(poll, current_user.id, vote_data.option_index)
    except AlreadyVotedError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You have already voted on this poll",
        )
    except InvalidOptionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return poll_to_results_schema(poll, votes, current_user.id)

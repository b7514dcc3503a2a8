# src/kgotla/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Kgotla API."""

from typing import Literal

from fastapi import APIRouter, HTTPException, status

from kgotla.schemas.vote import MyVoteResponse, VoteCreate, VoteResponse
from kgotla.services.vote_ledger import (
    InvalidDirectionError,
    InvalidTargetTypeError,
    TargetNotFoundError,
    cast_vote,
    get_vote,
)

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post(
    "",
    response_model=VoteResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def cast_vote_endpoint(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast, switch or withdraw a vote on a post or comment.

    Voting the same direction twice withdraws the vote; voting the other
    direction switches it.
    """
    try:
        result = cast_vote(
            db,
            voter_id=current_user.id,
            target_type=vote_data.target_type,
            target_id=vote_data.target_id,
            direction=vote_data.direction,
        )
    except TargetNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except (InvalidDirectionError, InvalidTargetTypeError) as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err

    return VoteResponse(
        status=result.status,
        direction=result.direction,
        upvote_count=result.upvote_count,
        downvote_count=result.downvote_count,
    )


@router.get("/{target_type}/{target_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    target_type: Literal["post", "comment"],
    target_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get the current user's vote on a post or comment."""
    vote = get_vote(
        db,
        voter_id=current_user.id,
        target_type=target_type,
        target_id=target_id,
    )
    if vote is None:
        return MyVoteResponse(direction=None)
    return MyVoteResponse(direction=vote.direction)

# src/nicolas_qui_paie/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Nicolas Qui Paie API."""

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError

from nicolas_qui_paie.models import Vote
from nicolas_qui_paie.schemas.vote import VoteCreate, VoteResponse
from nicolas_qui_paie.services.voting import InvalidArgumentError, UserNotFoundError

from ..dependencies import CurrentUserDep, SessionDep, VotingServiceDep, ensure_same_user
from .proposals import get_proposal_or_404

router = APIRouter(prefix="/votes", tags=["votes"])


def _to_response(vote: Vote) -> VoteResponse:
    return VoteResponse.model_validate(vote)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=VoteResponse)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    session: SessionDep,
    voting_service: VotingServiceDep,
) -> VoteResponse:
    """Vote for or against a proposal; voting again replaces the earlier vote."""
    await get_proposal_or_404(session, vote_data.proposal_id)

    try:
        vote = await voting_service.cast_vote(vote_data, current_user.id)
    except InvalidArgumentError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    except UserNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(err)) from err
    except IntegrityError as err:
        # A concurrent request inserted the same (user, proposal) vote first.
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Vote was modified concurrently, please retry",
        ) from err

    return _to_response(vote)


@router.get("/proposal/{proposal_id}", response_model=list[VoteResponse])
async def get_votes_for_proposal(
    proposal_id: int,
    voting_service: VotingServiceDep,
) -> list[VoteResponse]:
    """List every vote cast on a proposal, newest first."""
    votes = await voting_service.get_votes_for_proposal(proposal_id)
    return [_to_response(vote) for vote in votes]


@router.get("/user/{user_id}", response_model=list[VoteResponse])
async def get_user_votes(
    user_id: str,
    current_user: CurrentUserDep,
    voting_service: VotingServiceDep,
) -> list[VoteResponse]:
    """List the current user's votes."""
    ensure_same_user(current_user, user_id)
    votes = await voting_service.get_user_votes(user_id)
    return [_to_response(vote) for vote in votes]


@router.get("/user/{user_id}/proposal/{proposal_id}", response_model=VoteResponse)
async def get_user_vote_for_proposal(
    user_id: str,
    proposal_id: int,
    current_user: CurrentUserDep,
    voting_service: VotingServiceDep,
) -> VoteResponse:
    """Return the current user's vote on one proposal."""
    ensure_same_user(current_user, user_id)
    vote = await voting_service.get_user_vote_for_proposal(user_id, proposal_id)
    if vote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vote not found")
    return _to_response(vote)


@router.delete(
    "/user/{user_id}/proposal/{proposal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_vote(
    user_id: str,
    proposal_id: int,
    current_user: CurrentUserDep,
    voting_service: VotingServiceDep,
) -> Response:
    """Withdraw the current user's vote; succeeds even when there was none."""
    ensure_same_user(current_user, user_id)
    await voting_service.remove_vote(user_id, proposal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

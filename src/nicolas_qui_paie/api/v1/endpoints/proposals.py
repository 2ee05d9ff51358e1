# src/nicolas_qui_paie/api/v1/endpoints/proposals.py
"""Proposal endpoints for the Nicolas Qui Paie API."""

from typing import NoReturn

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.models import Proposal
from nicolas_qui_paie.repositories.proposal_repo import ProposalRepository, ProposalSort
from nicolas_qui_paie.schemas.proposal import (
    ProposalCreate,
    ProposalResponse,
    ProposalStatusUpdate,
    ProposalUpdate,
)
from nicolas_qui_paie.services.proposals import (
    ProposalError,
    ProposalNotFoundError,
    ProposalPermissionError,
)

from ..dependencies import CurrentUserDep, ProposalServiceDep

router = APIRouter(prefix="/proposals", tags=["proposals"])


async def get_proposal_or_404(session: AsyncSession, proposal_id: int) -> Proposal:
    proposal = await ProposalRepository(session).get_by_id(proposal_id)
    if proposal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Proposal not found")
    return proposal


def _raise_http(err: ProposalError) -> NoReturn:
    if isinstance(err, ProposalNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(err, ProposalPermissionError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=code, detail=str(err)) from err


@router.get("/", response_model=list[ProposalResponse])
async def list_proposals(
    proposal_service: ProposalServiceDep,
    skip: int = Query(0, ge=0),
    take: int = Query(20, ge=1, le=100),
    category_id: int | None = Query(None, ge=1),
    search: str | None = Query(None, max_length=100),
    sort: ProposalSort = Query(ProposalSort.RECENT),
) -> list[ProposalResponse]:
    """List active proposals."""
    proposals = await proposal_service.list_active(
        skip=skip, take=take, category_id=category_id, search=search, sort=sort
    )
    return [ProposalResponse.model_validate(p) for p in proposals]


@router.get("/trending", response_model=list[ProposalResponse])
async def list_trending_proposals(
    proposal_service: ProposalServiceDep,
    take: int = Query(5, ge=1, le=50),
) -> list[ProposalResponse]:
    """List the most voted proposals of the trending window."""
    proposals = await proposal_service.list_trending(take)
    return [ProposalResponse.model_validate(p) for p in proposals]


@router.get("/{proposal_id}", response_model=ProposalResponse)
async def get_proposal(
    proposal_id: int,
    proposal_service: ProposalServiceDep,
) -> ProposalResponse:
    """Return one proposal and count the view."""
    try:
        await proposal_service.increment_views(proposal_id)
        proposal = await proposal_service.get(proposal_id)
    except ProposalError as err:
        _raise_http(err)
    return ProposalResponse.model_validate(proposal)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ProposalResponse)
async def create_proposal(
    data: ProposalCreate,
    current_user: CurrentUserDep,
    proposal_service: ProposalServiceDep,
) -> ProposalResponse:
    try:
        proposal = await proposal_service.create(data, current_user.id)
    except ProposalError as err:
        _raise_http(err)
    return ProposalResponse.model_validate(proposal)


@router.put("/{proposal_id}", response_model=ProposalResponse)
async def update_proposal(
    proposal_id: int,
    data: ProposalUpdate,
    current_user: CurrentUserDep,
    proposal_service: ProposalServiceDep,
) -> ProposalResponse:
    try:
        proposal = await proposal_service.update(proposal_id, data, current_user.id)
    except ProposalError as err:
        _raise_http(err)
    return ProposalResponse.model_validate(proposal)


@router.patch("/{proposal_id}/status", response_model=ProposalResponse)
async def change_proposal_status(
    proposal_id: int,
    data: ProposalStatusUpdate,
    current_user: CurrentUserDep,
    proposal_service: ProposalServiceDep,
) -> ProposalResponse:
    try:
        proposal = await proposal_service.change_status(proposal_id, data.status, current_user.id)
    except ProposalError as err:
        _raise_http(err)
    return ProposalResponse.model_validate(proposal)


@router.delete("/{proposal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_proposal(
    proposal_id: int,
    current_user: CurrentUserDep,
    proposal_service: ProposalServiceDep,
) -> Response:
    try:
        await proposal_service.delete(proposal_id, current_user.id)
    except ProposalError as err:
        _raise_http(err)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

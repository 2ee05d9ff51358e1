"""Shared FastAPI dependencies for the v1 endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.core.security import JWTError, decode_subject
from nicolas_qui_paie.db.session import get_session
from nicolas_qui_paie.models import User
from nicolas_qui_paie.repositories.unit_of_work import UnitOfWork
from nicolas_qui_paie.services.analytics import AnalyticsService
from nicolas_qui_paie.services.comments import CommentService
from nicolas_qui_paie.services.proposals import ProposalService
from nicolas_qui_paie.services.voting import VotingService

bearer_scheme = HTTPBearer()

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    session: SessionDep,
) -> User:
    """Resolve the authenticated user from the bearer token.

    Raises:
        HTTPException: 401 if the token is invalid or the user does not exist.
    """
    try:
        user_id = decode_subject(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = await session.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def get_voting_service(session: SessionDep) -> VotingService:
    return VotingService(UnitOfWork(session))


def get_proposal_service(session: SessionDep) -> ProposalService:
    return ProposalService(session)


def get_analytics_service(session: SessionDep) -> AnalyticsService:
    return AnalyticsService(session)


def get_comment_service(session: SessionDep) -> CommentService:
    return CommentService(session)


CurrentUserDep = Annotated[User, Depends(get_current_user)]
VotingServiceDep = Annotated[VotingService, Depends(get_voting_service)]
ProposalServiceDep = Annotated[ProposalService, Depends(get_proposal_service)]
AnalyticsServiceDep = Annotated[AnalyticsService, Depends(get_analytics_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]


def ensure_same_user(current_user: User, user_id: str) -> None:
    """Reject access to another user's votes."""
    if current_user.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot access another user's votes",
        )

"""Data access helpers for working with votes."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.models.vote import Vote

__all__ = ["VoteRepository"]


class VoteRepository:
    """Thin wrapper around database access for vote entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async SQLAlchemy session."""
        self.session = session

    async def get_by_id(self, vote_id: int) -> Vote | None:
        return await self.session.get(Vote, vote_id)

    async def get_by_user_and_proposal(self, user_id: str, proposal_id: int) -> Vote | None:
        """Return the vote ``user_id`` holds on ``proposal_id``, if any."""
        result = await self.session.execute(
            select(Vote).where(Vote.user_id == user_id, Vote.proposal_id == proposal_id)
        )
        return result.scalars().first()

    async def insert(self, vote: Vote) -> Vote:
        """Stage a new vote row."""
        self.session.add(vote)
        return vote

    async def update(self, vote: Vote) -> Vote:
        """Stage changes made to an existing vote row."""
        self.session.add(vote)
        return vote

    async def delete(self, vote_id: int) -> None:
        """Stage deletion of a vote; unknown identifiers are ignored."""
        vote = await self.get_by_id(vote_id)
        if vote is not None:
            await self.session.delete(vote)

    async def list_by_proposal(self, proposal_id: int) -> list[Vote]:
        """Return votes on a proposal, newest first."""
        result = await self.session.execute(
            select(Vote)
            .where(Vote.proposal_id == proposal_id)
            .order_by(Vote.voted_at.desc(), Vote.id.desc())
        )
        return list(result.scalars())

    async def list_by_user(self, user_id: str) -> list[Vote]:
        """Return votes cast by a user, newest first."""
        result = await self.session.execute(
            select(Vote)
            .where(Vote.user_id == user_id)
            .order_by(Vote.voted_at.desc(), Vote.id.desc())
        )
        return list(result.scalars())

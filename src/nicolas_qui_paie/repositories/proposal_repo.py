"""Data access helpers for working with proposals and categories."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Select, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.models.enums import ProposalStatus, VoteType
from nicolas_qui_paie.models.proposal import Category, Proposal
from nicolas_qui_paie.models.vote import Vote

__all__ = ["CategoryRepository", "ProposalRepository", "ProposalSort"]


class ProposalSort(str, Enum):
    """Orderings offered when listing active proposals."""

    RECENT = "recent"
    POPULAR = "popular"
    CONTROVERSIAL = "controversial"


class ProposalRepository:
    """Thin wrapper around database access for proposal entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async SQLAlchemy session."""
        self.session = session

    async def get_by_id(self, proposal_id: int) -> Proposal | None:
        """Return a proposal by identifier."""
        return await self.session.get(Proposal, proposal_id)

    async def add(self, proposal: Proposal) -> Proposal:
        """Insert a new proposal and return the persisted ORM instance."""
        self.session.add(proposal)
        await self.session.flush()
        return proposal

    async def update(self, proposal: Proposal) -> Proposal:
        self.session.add(proposal)
        await self.session.flush()
        return proposal

    async def delete(self, proposal: Proposal) -> None:
        """Delete a proposal.

        Its votes and comments go with it through the ``ON DELETE CASCADE``
        foreign keys; no vote row is written from here.
        """
        await self.session.delete(proposal)
        await self.session.flush()

    async def recompute_vote_counts(self, proposal_id: int) -> Proposal | None:
        """Recount For/Against votes from the vote rows and store them on the proposal.

        Pending vote writes must be flushed before calling this; the count
        queries only see what the database sees.
        """
        proposal = await self.get_by_id(proposal_id)
        if proposal is None:
            return None

        result = await self.session.execute(
            select(
                func.count(case((Vote.vote_type == VoteType.FOR, 1))),
                func.count(case((Vote.vote_type == VoteType.AGAINST, 1))),
            ).where(Vote.proposal_id == proposal_id)
        )
        votes_for, votes_against = result.one()
        proposal.votes_for = int(votes_for)
        proposal.votes_against = int(votes_against)
        return proposal

    async def list_active(
        self,
        *,
        skip: int = 0,
        take: int = 20,
        category_id: int | None = None,
        search: str | None = None,
        sort: ProposalSort = ProposalSort.RECENT,
    ) -> list[Proposal]:
        """Return active proposals, filtered and ordered for listing pages."""
        stmt = self._active_query(category_id=category_id, search=search)
        total = Proposal.votes_for + Proposal.votes_against

        if sort is ProposalSort.POPULAR:
            stmt = stmt.order_by(
                Proposal.votes_for.desc(),
                total.desc(),
                Proposal.created_at.desc(),
            )
        elif sort is ProposalSort.CONTROVERSIAL:
            # Closest to an even split first; both sides must have voters.
            for_ratio = Proposal.votes_for * 1.0 / total
            stmt = stmt.where(Proposal.votes_for > 0, Proposal.votes_against > 0).order_by(
                func.abs(0.5 - for_ratio),
                total.desc(),
                Proposal.created_at.desc(),
            )
        else:
            stmt = stmt.order_by(Proposal.created_at.desc(), Proposal.id.desc())

        result = await self.session.execute(stmt.offset(skip).limit(take))
        return list(result.scalars())

    async def list_trending(self, *, since: datetime, take: int = 5) -> list[Proposal]:
        """Return recent active proposals with the most votes."""
        result = await self.session.execute(
            select(Proposal)
            .where(Proposal.status == ProposalStatus.ACTIVE, Proposal.created_at >= since)
            .order_by(
                (Proposal.votes_for + Proposal.votes_against).desc(),
                Proposal.created_at.desc(),
            )
            .limit(take)
        )
        return list(result.scalars())

    @staticmethod
    def _active_query(*, category_id: int | None, search: str | None) -> Select[tuple[Proposal]]:
        stmt = select(Proposal).where(Proposal.status == ProposalStatus.ACTIVE)
        if category_id is not None:
            stmt = stmt.where(Proposal.category_id == category_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(Proposal.title.ilike(pattern), Proposal.description.ilike(pattern))
            )
        return stmt


class CategoryRepository:
    """Thin wrapper around database access for categories."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, category_id: int) -> Category | None:
        return await self.session.get(Category, category_id)

    async def list_active(self) -> list[Category]:
        """Return active categories in display order."""
        result = await self.session.execute(
            select(Category)
            .where(Category.is_active.is_(True))
            .order_by(Category.sort_order, Category.name)
        )
        return list(result.scalars())

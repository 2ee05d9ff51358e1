"""Service-level helpers for creating, editing and listing proposals.

Vote tallies are read-only here; only the voting service writes them.
"""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.core.settings import settings
from nicolas_qui_paie.db.time import days_ago, utcnow
from nicolas_qui_paie.models.enums import ProposalStatus
from nicolas_qui_paie.models.proposal import Category, Proposal
from nicolas_qui_paie.repositories.proposal_repo import (
    CategoryRepository,
    ProposalRepository,
    ProposalSort,
)
from nicolas_qui_paie.schemas.proposal import ProposalCreate, ProposalUpdate

__all__ = [
    "CategoryNotFoundError",
    "ProposalError",
    "ProposalNotFoundError",
    "ProposalPermissionError",
    "ProposalService",
]

logger = logging.getLogger(__name__)


class ProposalError(Exception):
    """Base class for expected proposal failures."""


class ProposalNotFoundError(ProposalError):
    def __init__(self, proposal_id: int) -> None:
        super().__init__(f"Proposal {proposal_id} not found")
        self.proposal_id = proposal_id


class CategoryNotFoundError(ProposalError):
    def __init__(self, category_id: int) -> None:
        super().__init__(f"Category {category_id} not found")
        self.category_id = category_id


class ProposalPermissionError(ProposalError):
    """The acting user does not own the proposal."""


class ProposalService:
    """Proposal CRUD and listing on top of a single session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.proposals = ProposalRepository(session)
        self.categories = CategoryRepository(session)

    async def list_active(
        self,
        *,
        skip: int = 0,
        take: int = 20,
        category_id: int | None = None,
        search: str | None = None,
        sort: ProposalSort = ProposalSort.RECENT,
    ) -> list[Proposal]:
        return await self.proposals.list_active(
            skip=skip, take=take, category_id=category_id, search=search, sort=sort
        )

    async def list_trending(self, take: int = 5) -> list[Proposal]:
        """Return the most voted active proposals created within the trending window."""
        since = days_ago(settings.trending_window_days)
        return await self.proposals.list_trending(since=since, take=take)

    async def list_categories(self) -> list[Category]:
        return await self.categories.list_active()

    async def get(self, proposal_id: int) -> Proposal:
        proposal = await self.proposals.get_by_id(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)
        return proposal

    async def create(self, data: ProposalCreate, user_id: str) -> Proposal:
        """Persist a new active proposal authored by ``user_id``."""
        await self._require_category(data.category_id)
        proposal = Proposal(
            title=data.title,
            description=data.description,
            category_id=data.category_id,
            image_url=data.image_url,
            tags=data.tags,
            created_by_id=user_id,
            status=ProposalStatus.ACTIVE,
            created_at=utcnow(),
            votes_for=0,
            votes_against=0,
            views_count=0,
        )
        await self.proposals.add(proposal)
        await self.session.commit()
        logger.info("Proposal %s created by user %s", proposal.id, user_id)
        return proposal

    async def update(self, proposal_id: int, data: ProposalUpdate, user_id: str) -> Proposal:
        proposal = await self._get_owned(proposal_id, user_id)
        await self._require_category(data.category_id)

        proposal.title = data.title
        proposal.description = data.description
        proposal.category_id = data.category_id
        proposal.image_url = data.image_url
        proposal.tags = data.tags
        proposal.updated_at = utcnow()

        await self.proposals.update(proposal)
        await self.session.commit()
        logger.info("Proposal %s updated by user %s", proposal_id, user_id)
        return proposal

    async def change_status(
        self, proposal_id: int, status: ProposalStatus, user_id: str
    ) -> Proposal:
        """Move a proposal to ``status``; the first close stamps ``closed_at``."""
        proposal = await self._get_owned(proposal_id, user_id)
        old_status = proposal.status

        proposal.status = status
        proposal.updated_at = utcnow()
        if status is ProposalStatus.CLOSED and proposal.closed_at is None:
            proposal.closed_at = proposal.updated_at

        await self.proposals.update(proposal)
        await self.session.commit()
        logger.info(
            "Proposal %s status changed from %s to %s by user %s",
            proposal_id,
            old_status.value,
            status.value,
            user_id,
        )
        return proposal

    async def delete(self, proposal_id: int, user_id: str) -> None:
        proposal = await self._get_owned(proposal_id, user_id)
        await self.proposals.delete(proposal)
        await self.session.commit()
        logger.info("Proposal %s deleted by user %s", proposal_id, user_id)

    async def increment_views(self, proposal_id: int) -> None:
        """Count one more view; a missing proposal is only logged."""
        proposal = await self.proposals.get_by_id(proposal_id)
        if proposal is None:
            logger.warning("Attempted to increment views for missing proposal %s", proposal_id)
            return
        proposal.views_count += 1
        await self.proposals.update(proposal)
        await self.session.commit()
        logger.debug("Proposal %s now has %d views", proposal_id, proposal.views_count)

    async def _get_owned(self, proposal_id: int, user_id: str) -> Proposal:
        proposal = await self.get(proposal_id)
        if proposal.created_by_id != user_id:
            raise ProposalPermissionError(
                f"User {user_id} is not allowed to modify proposal {proposal_id}"
            )
        return proposal

    async def _require_category(self, category_id: int) -> Category:
        category = await self.categories.get_by_id(category_id)
        if category is None or not category.is_active:
            raise CategoryNotFoundError(category_id)
        return category

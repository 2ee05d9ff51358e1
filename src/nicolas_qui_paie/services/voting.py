"""Voting service: the only writer of votes, tallies and reputation.

Each public mutation runs as one transaction. The write order inside it is
fixed: vote row, user standing, flush, tally recount, flush, commit. The
recount reads from the database, so skipping the first flush would count
stale rows.
"""
from __future__ import annotations

import logging

from nicolas_qui_paie.db.time import utcnow
from nicolas_qui_paie.models.user import User
from nicolas_qui_paie.models.vote import VOTE_WEIGHT, Vote
from nicolas_qui_paie.repositories.unit_of_work import UnitOfWork
from nicolas_qui_paie.schemas.vote import VoteCreate
from nicolas_qui_paie.services.contribution import (
    Standing,
    apply_reputation_delta,
    vote_cast_delta,
    vote_removal_delta,
)

__all__ = [
    "InvalidArgumentError",
    "UserNotFoundError",
    "VotingError",
    "VotingService",
]

logger = logging.getLogger(__name__)


class VotingError(Exception):
    """Base class for expected voting failures."""


class InvalidArgumentError(VotingError):
    """A required identifier was empty or missing."""


class UserNotFoundError(VotingError):
    """The acting user does not exist."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id


def _require_user_id(user_id: str | None) -> str:
    if not user_id:
        raise InvalidArgumentError("user_id must be a non-empty string")
    return user_id


class VotingService:
    """Cast, change and withdraw votes while keeping tallies and badges consistent."""

    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    async def cast_vote(self, vote_data: VoteCreate, user_id: str) -> Vote:
        """Record ``user_id``'s vote on a proposal, replacing any earlier one.

        Args:
            vote_data: Target proposal, direction and optional comment.
            user_id: Identifier of the acting user.

        Returns:
            The inserted or updated vote row.

        Raises:
            InvalidArgumentError: If ``user_id`` is empty. No transaction is opened.
            UserNotFoundError: If the user does not exist. The transaction is rolled back.
        """
        user_id = _require_user_id(user_id)
        proposal_id = vote_data.proposal_id

        await self.uow.begin()
        try:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError(user_id)

            vote = await self.uow.votes.get_by_user_and_proposal(user_id, proposal_id)
            if vote is not None:
                vote.vote_type = vote_data.vote_type
                vote.comment = vote_data.comment
                vote.voted_at = utcnow()
                vote.weight = VOTE_WEIGHT
                vote = await self.uow.votes.update(vote)
            else:
                vote = await self.uow.votes.insert(
                    Vote(
                        user_id=user_id,
                        proposal_id=proposal_id,
                        vote_type=vote_data.vote_type,
                        comment=vote_data.comment,
                        voted_at=utcnow(),
                        weight=VOTE_WEIGHT,
                    )
                )

            await self._adjust_standing(user, vote_cast_delta(vote_data.vote_type))

            await self.uow.flush()
            await self.uow.proposals.recompute_vote_counts(proposal_id)
            await self.uow.flush()
            await self.uow.commit()
        except Exception as exc:
            await self.uow.rollback()
            if isinstance(exc, VotingError):
                logger.warning(
                    "Vote rejected for proposal %s by user %s: %s", proposal_id, user_id, exc
                )
            else:
                logger.error(
                    "Error casting vote for proposal %s by user %s",
                    proposal_id,
                    user_id,
                    exc_info=True,
                )
            raise

        logger.info(
            "Vote cast for proposal %s by user %s (%s, weight %d)",
            proposal_id,
            user_id,
            vote.vote_type.value,
            vote.weight,
        )
        return vote

    async def remove_vote(self, user_id: str, proposal_id: int) -> None:
        """Withdraw ``user_id``'s vote on ``proposal_id``.

        Removing a vote that does not exist is a silent no-op.
        """
        user_id = _require_user_id(user_id)

        await self.uow.begin()
        try:
            vote = await self.uow.votes.get_by_user_and_proposal(user_id, proposal_id)
            if vote is None:
                await self.uow.commit()
                logger.debug("No vote to remove for proposal %s by user %s", proposal_id, user_id)
                return

            removed_type = vote.vote_type
            await self.uow.votes.delete(vote.id)

            user = await self.uow.users.get_by_id(user_id)
            if user is not None:
                await self._adjust_standing(user, vote_removal_delta(removed_type))

            await self.uow.flush()
            await self.uow.proposals.recompute_vote_counts(proposal_id)
            await self.uow.flush()
            await self.uow.commit()
        except Exception:
            await self.uow.rollback()
            logger.error(
                "Error removing vote for proposal %s by user %s",
                proposal_id,
                user_id,
                exc_info=True,
            )
            raise

        logger.info("Vote removed for proposal %s by user %s", proposal_id, user_id)

    async def get_user_vote_for_proposal(self, user_id: str, proposal_id: int) -> Vote | None:
        """Return the user's current vote on a proposal, or ``None``."""
        user_id = _require_user_id(user_id)
        return await self.uow.votes.get_by_user_and_proposal(user_id, proposal_id)

    async def get_votes_for_proposal(self, proposal_id: int) -> list[Vote]:
        return await self.uow.votes.list_by_proposal(proposal_id)

    async def get_user_votes(self, user_id: str) -> list[Vote]:
        user_id = _require_user_id(user_id)
        return await self.uow.votes.list_by_user(user_id)

    async def _adjust_standing(self, user: User, delta: int) -> None:
        before = Standing.of(user)
        after = apply_reputation_delta(before, delta)
        if after == before:
            return

        user.reputation_score = after.reputation_score
        user.contribution_level = after.contribution_level
        await self.uow.users.update(user)

        if after.contribution_level != before.contribution_level:
            logger.info(
                "User %s moved from %s to %s",
                user.id,
                before.contribution_level.value,
                after.contribution_level.value,
            )

"""Transaction coordinator spanning the user, proposal and vote stores."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.repositories.proposal_repo import ProposalRepository
from nicolas_qui_paie.repositories.user_repo import UserRepository
from nicolas_qui_paie.repositories.vote_repo import VoteRepository

__all__ = ["UnitOfWork", "UnitOfWorkError"]

logger = logging.getLogger(__name__)


class UnitOfWorkError(RuntimeError):
    """The unit of work was used outside a begun transaction."""


class UnitOfWork:
    """Group repository calls on one session into a single transaction.

    ``flush`` pushes pending writes to the database so later reads in the
    same transaction observe them, without ending the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.proposals = ProposalRepository(session)
        self.votes = VoteRepository(session)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    async def begin(self) -> None:
        """Start the transaction for this unit of work.

        A read issued earlier on the same session (for example the identity
        lookup done while authenticating the request) has already autobegun a
        transaction; it is adopted rather than restarted.
        """
        if not self.session.in_transaction():
            await self.session.begin()
        self._active = True

    async def flush(self) -> None:
        await self.session.flush()

    async def commit(self) -> None:
        """Commit the transaction opened by ``begin``.

        A failed commit leaves the unit of work active so the caller can
        still roll it back.

        Raises:
            UnitOfWorkError: If ``begin`` was not called first.
        """
        if not self._active:
            raise UnitOfWorkError("commit() called without begin()")
        await self.session.commit()
        self._active = False

    async def rollback(self) -> None:
        if not self._active:
            return
        try:
            await self.session.rollback()
        finally:
            self._active = False
        logger.debug("Unit of work rolled back")

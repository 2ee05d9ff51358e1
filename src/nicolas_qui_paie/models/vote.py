# src/nicolas_qui_paie/models/vote.py
"""Models capturing votes on proposals."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nicolas_qui_paie.db.session import Base
from nicolas_qui_paie.db.time import utcnow
from nicolas_qui_paie.models.enums import VoteType

if TYPE_CHECKING:
    from nicolas_qui_paie.models.proposal import Proposal
    from nicolas_qui_paie.models.user import User

# One Nicolas, one voice: every vote counts the same whatever the voter's badge.
VOTE_WEIGHT = 1


class Vote(Base):
    """A user's current vote on a proposal.

    At most one row exists per (user, proposal); voting again rewrites it.
    """

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("user_id", "proposal_id", name="uq_votes_user_proposal"),
        CheckConstraint(f"weight = {VOTE_WEIGHT}", name="ck_votes_weight_fixed"),
        Index("ix_votes_proposal_id", "proposal_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    proposal_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("proposals.id", ondelete="CASCADE"),
        nullable=False,
    )
    vote_type: Mapped[VoteType] = mapped_column(
        Enum(VoteType, native_enum=False, length=16),
        nullable=False,
    )
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=VOTE_WEIGHT)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    voted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="votes")
    proposal: Mapped[Proposal] = relationship("Proposal", back_populates="votes")

    def __repr__(self) -> str:
        return f"<Vote {self.id} {self.vote_type} by {self.user_id} on {self.proposal_id}>"

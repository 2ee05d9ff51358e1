"""SQLAlchemy models for proposals and their categories."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nicolas_qui_paie.db.session import Base
from nicolas_qui_paie.db.time import as_utc, utcnow
from nicolas_qui_paie.models.enums import ProposalStatus

if TYPE_CHECKING:
    from nicolas_qui_paie.models.comment import Comment
    from nicolas_qui_paie.models.user import User
    from nicolas_qui_paie.models.vote import Vote

HOT_MIN_VOTES = 50
HOT_WINDOW = timedelta(days=3)


class Category(Base):
    """Thematic bucket proposals are filed under."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    color: Mapped[str] = mapped_column(String(16), nullable=False, default="#007bff")
    icon_class: Mapped[str] = mapped_column(String(64), nullable=False, default="fas fa-folder")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    proposals: Mapped[list[Proposal]] = relationship("Proposal", back_populates="category")


class Proposal(Base):
    """Fiscal or policy proposal submitted by a user.

    ``votes_for`` and ``votes_against`` are a cached tally. They are recounted
    from the vote rows after every vote mutation and never adjusted by hand.
    """

    __tablename__ = "proposals"
    __table_args__ = (
        CheckConstraint("votes_for >= 0", name="ck_proposals_votes_for_non_negative"),
        CheckConstraint("votes_against >= 0", name="ck_proposals_votes_against_non_negative"),
        Index("ix_proposals_status_created_at", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ProposalStatus] = mapped_column(
        Enum(ProposalStatus, native_enum=False, length=16),
        nullable=False,
        default=ProposalStatus.DRAFT,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    votes_for: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    votes_against: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    views_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # Comma-separated free-form tags.
    tags: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_by_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )

    created_by: Mapped[User] = relationship("User", back_populates="proposals")
    category: Mapped[Category] = relationship("Category", back_populates="proposals")
    votes: Mapped[list[Vote]] = relationship(
        "Vote",
        back_populates="proposal",
        passive_deletes="all",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="proposal",
        passive_deletes="all",
    )

    @property
    def total_votes(self) -> int:
        return self.votes_for + self.votes_against

    @property
    def approval_rate(self) -> float:
        """Percentage of For votes, 0 when nobody voted."""
        if self.total_votes == 0:
            return 0.0
        return self.votes_for / self.total_votes * 100

    @property
    def is_hot(self) -> bool:
        return (
            self.total_votes > HOT_MIN_VOTES
            and as_utc(self.created_at) > utcnow() - HOT_WINDOW
        )

    def __repr__(self) -> str:
        return f"<Proposal {self.id} for={self.votes_for} against={self.votes_against}>"

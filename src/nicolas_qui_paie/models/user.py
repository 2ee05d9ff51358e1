"""SQLAlchemy model for platform users ("Nicolas")."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from nicolas_qui_paie.db.session import Base
from nicolas_qui_paie.db.time import utcnow
from nicolas_qui_paie.models.enums import ContributionLevel

if TYPE_CHECKING:
    from nicolas_qui_paie.models.comment import Comment
    from nicolas_qui_paie.models.proposal import Proposal
    from nicolas_qui_paie.models.vote import Vote


class User(Base):
    """Registered citizen with a reputation score and a badge tier.

    ``reputation_score`` and ``contribution_level`` are only written by the
    voting service; the level always matches the score's threshold tier.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("reputation_score >= 0", name="ck_users_reputation_non_negative"),
    )

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    reputation_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    contribution_level: Mapped[ContributionLevel] = mapped_column(
        Enum(ContributionLevel, native_enum=False, length=32),
        nullable=False,
        default=ContributionLevel.PETIT_NICOLAS,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    votes: Mapped[list[Vote]] = relationship("Vote", back_populates="user")
    proposals: Mapped[list[Proposal]] = relationship("Proposal", back_populates="created_by")
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="user", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User {self.id} score={self.reputation_score} level={self.contribution_level}>"

# src/nicolas_qui_paie/models/comment.py
"""Models for proposal discussions: comments, replies and likes."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
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

if TYPE_CHECKING:
    from nicolas_qui_paie.models.proposal import Proposal
    from nicolas_qui_paie.models.user import User


class Comment(Base):
    """A message posted under a proposal, optionally replying to another comment.

    Deleting a comment only flags it; ``likes_count`` is recounted from the
    like rows after every like or unlike.
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint("likes_count >= 0", name="ck_comments_likes_non_negative"),
        Index("ix_comments_proposal_created_at", "proposal_id", "created_at"),
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
    parent_comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_moderated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped[User] = relationship("User", back_populates="comments")
    proposal: Mapped[Proposal] = relationship("Proposal", back_populates="comments")
    likes: Mapped[list[CommentLike]] = relationship(
        "CommentLike",
        back_populates="comment",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Comment {self.id} on {self.proposal_id} by {self.user_id}>"


class CommentLike(Base):
    """One user's like on a comment."""

    __tablename__ = "comment_likes"
    __table_args__ = (
        UniqueConstraint("user_id", "comment_id", name="uq_comment_likes_user_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    comment: Mapped[Comment] = relationship("Comment", back_populates="likes")

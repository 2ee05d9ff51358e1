"""Data access helpers for working with comments and comment likes."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.models.comment import Comment, CommentLike

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, comment_id: int) -> Comment | None:
        return await self.session.get(Comment, comment_id)

    async def add(self, comment: Comment) -> Comment:
        self.session.add(comment)
        await self.session.flush()
        return comment

    async def update(self, comment: Comment) -> Comment:
        self.session.add(comment)
        await self.session.flush()
        return comment

    async def list_by_proposal(self, proposal_id: int) -> list[Comment]:
        """Return the visible comments of a proposal, oldest first."""
        result = await self.session.execute(
            select(Comment)
            .where(Comment.proposal_id == proposal_id, Comment.is_deleted.is_(False))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(result.scalars())

    async def get_like(self, comment_id: int, user_id: str) -> CommentLike | None:
        result = await self.session.execute(
            select(CommentLike).where(
                CommentLike.comment_id == comment_id, CommentLike.user_id == user_id
            )
        )
        return result.scalars().first()

    async def add_like(self, like: CommentLike) -> CommentLike:
        self.session.add(like)
        await self.session.flush()
        return like

    async def delete_like(self, like: CommentLike) -> None:
        await self.session.delete(like)
        await self.session.flush()

    async def recompute_likes(self, comment: Comment) -> Comment:
        """Store the number of like rows on ``comment``."""
        result = await self.session.execute(
            select(func.count(CommentLike.id)).where(CommentLike.comment_id == comment.id)
        )
        comment.likes_count = int(result.scalar_one())
        return comment

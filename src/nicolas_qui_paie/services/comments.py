"""Comment threads under proposals, with replies and likes."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.db.time import utcnow
from nicolas_qui_paie.models.comment import Comment, CommentLike
from nicolas_qui_paie.repositories.comment_repo import CommentRepository
from nicolas_qui_paie.repositories.proposal_repo import ProposalRepository
from nicolas_qui_paie.schemas.comment import CommentCreate, CommentUpdate

__all__ = [
    "CommentError",
    "CommentNotFoundError",
    "CommentPermissionError",
    "CommentService",
    "InvalidParentCommentError",
    "ProposalForCommentNotFoundError",
]

logger = logging.getLogger(__name__)


class CommentError(Exception):
    """Base class for expected comment failures."""


class CommentNotFoundError(CommentError):
    def __init__(self, comment_id: int) -> None:
        super().__init__(f"Comment {comment_id} not found")
        self.comment_id = comment_id


class ProposalForCommentNotFoundError(CommentError):
    def __init__(self, proposal_id: int) -> None:
        super().__init__(f"Proposal {proposal_id} not found")
        self.proposal_id = proposal_id


class InvalidParentCommentError(CommentError):
    """The replied-to comment is missing, deleted or under another proposal."""


class CommentPermissionError(CommentError):
    """The acting user does not own the comment."""


class CommentService:
    """Post, edit, soft-delete and like comments on top of a single session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.comments = CommentRepository(session)
        self.proposals = ProposalRepository(session)

    async def list_for_proposal(self, proposal_id: int) -> list[Comment]:
        return await self.comments.list_by_proposal(proposal_id)

    async def create(self, data: CommentCreate, user_id: str) -> Comment:
        """Post a comment, or a reply when ``parent_comment_id`` is set."""
        if await self.proposals.get_by_id(data.proposal_id) is None:
            raise ProposalForCommentNotFoundError(data.proposal_id)
        if data.parent_comment_id is not None:
            parent = await self.comments.get_by_id(data.parent_comment_id)
            if parent is None or parent.is_deleted or parent.proposal_id != data.proposal_id:
                raise InvalidParentCommentError(
                    f"Comment {data.parent_comment_id} cannot be replied to "
                    f"under proposal {data.proposal_id}"
                )

        comment = Comment(
            user_id=user_id,
            proposal_id=data.proposal_id,
            parent_comment_id=data.parent_comment_id,
            content=data.content,
            likes_count=0,
            is_deleted=False,
            created_at=utcnow(),
        )
        await self.comments.add(comment)
        await self.session.commit()
        logger.info(
            "Comment %s posted on proposal %s by user %s", comment.id, data.proposal_id, user_id
        )
        return comment

    async def update(self, comment_id: int, data: CommentUpdate, user_id: str) -> Comment:
        comment = await self._get_owned(comment_id, user_id)
        comment.content = data.content
        comment.updated_at = utcnow()
        await self.comments.update(comment)
        await self.session.commit()
        logger.info("Comment %s edited by user %s", comment_id, user_id)
        return comment

    async def delete(self, comment_id: int, user_id: str) -> None:
        """Flag a comment as deleted; replies and likes are kept."""
        comment = await self._get_owned(comment_id, user_id)
        comment.is_deleted = True
        comment.updated_at = utcnow()
        await self.comments.update(comment)
        await self.session.commit()
        logger.warning("Comment %s deleted by user %s", comment_id, user_id)

    async def like(self, comment_id: int, user_id: str) -> Comment:
        """Like a comment; liking it twice changes nothing."""
        comment = await self._get_visible(comment_id)
        if await self.comments.get_like(comment_id, user_id) is None:
            await self.comments.add_like(CommentLike(comment_id=comment_id, user_id=user_id))
        await self.comments.recompute_likes(comment)
        await self.session.commit()
        return comment

    async def unlike(self, comment_id: int, user_id: str) -> Comment:
        comment = await self._get_visible(comment_id)
        like = await self.comments.get_like(comment_id, user_id)
        if like is not None:
            await self.comments.delete_like(like)
        await self.comments.recompute_likes(comment)
        await self.session.commit()
        return comment

    async def _get_visible(self, comment_id: int) -> Comment:
        comment = await self.comments.get_by_id(comment_id)
        if comment is None or comment.is_deleted:
            raise CommentNotFoundError(comment_id)
        return comment

    async def _get_owned(self, comment_id: int, user_id: str) -> Comment:
        comment = await self._get_visible(comment_id)
        if comment.user_id != user_id:
            raise CommentPermissionError(
                f"User {user_id} is not allowed to modify comment {comment_id}"
            )
        return comment

# src/nicolas_qui_paie/models/__init__.py
"""SQLAlchemy models for the Nicolas Qui Paie application."""

from .comment import Comment, CommentLike
from .enums import ContributionLevel, ProposalStatus, VoteType
from .proposal import Category, Proposal
from .user import User
from .vote import VOTE_WEIGHT, Vote

__all__ = [
    "Comment", "CommentLike",
    "ContributionLevel", "ProposalStatus", "VoteType",
    "Category", "Proposal",
    "User",
    "VOTE_WEIGHT", "Vote",
]

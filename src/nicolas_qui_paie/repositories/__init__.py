"""Repositories wrapping database access for each aggregate."""

from .comment_repo import CommentRepository
from .proposal_repo import CategoryRepository, ProposalRepository, ProposalSort
from .unit_of_work import UnitOfWork
from .user_repo import UserRepository
from .vote_repo import VoteRepository

__all__ = [
    "CommentRepository",
    "CategoryRepository",
    "ProposalRepository",
    "ProposalSort",
    "UnitOfWork",
    "UserRepository",
    "VoteRepository",
]

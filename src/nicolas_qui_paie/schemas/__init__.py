# src/nicolas_qui_paie/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .analytics import (
    ContributionLevelDistribution,
    DashboardStats,
    GlobalStats,
    TopContributor,
    VotingTrends,
)
from .comment import CommentCreate, CommentResponse, CommentUpdate
from .proposal import (
    CategoryResponse,
    ProposalCreate,
    ProposalResponse,
    ProposalStatusUpdate,
    ProposalUpdate,
)
from .user import UserResponse
from .vote import VoteCreate, VoteResponse

__all__ = [
    "CommentCreate", "CommentResponse", "CommentUpdate",
    "ContributionLevelDistribution", "DashboardStats", "GlobalStats",
    "TopContributor", "VotingTrends",
    "CategoryResponse", "ProposalCreate", "ProposalResponse",
    "ProposalStatusUpdate", "ProposalUpdate",
    "UserResponse",
    "VoteCreate", "VoteResponse",
]

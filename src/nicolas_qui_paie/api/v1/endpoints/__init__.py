# src/nicolas_qui_paie/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .analytics import router as analytics_router
from .categories import router as categories_router
from .comments import router as comments_router
from .proposals import router as proposals_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "analytics_router",
    "categories_router",
    "comments_router",
    "proposals_router",
    "users_router",
    "votes_router",
]

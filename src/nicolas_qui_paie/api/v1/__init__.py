# src/nicolas_qui_paie/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    analytics_router,
    categories_router,
    comments_router,
    proposals_router,
    users_router,
    votes_router,
)

__all__ = [
    "analytics_router",
    "categories_router",
    "comments_router",
    "proposals_router",
    "users_router",
    "votes_router",
]

"""Read-only aggregate queries for dashboards and leaderboards.

These queries run outside any voting transaction and may observe a slightly
stale snapshot.
"""
from __future__ import annotations

import logging
from datetime import date, datetime

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from nicolas_qui_paie.core.settings import settings
from nicolas_qui_paie.db.time import days_ago
from nicolas_qui_paie.models.comment import Comment
from nicolas_qui_paie.models.enums import ContributionLevel, ProposalStatus, VoteType
from nicolas_qui_paie.models.proposal import Proposal
from nicolas_qui_paie.models.user import User
from nicolas_qui_paie.models.vote import Vote
from nicolas_qui_paie.schemas.analytics import (
    ContributionLevelCount,
    ContributionLevelDistribution,
    DailyVoteCount,
    DashboardStats,
    GlobalStats,
    TopContributor,
    VotingTrends,
)

__all__ = ["AnalyticsService"]

logger = logging.getLogger(__name__)


def _percentage(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


class AnalyticsService:
    """Compute platform statistics from the current table contents."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _count(self, stmt) -> int:
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)

    async def global_stats(self) -> GlobalStats:
        total_users = await self._count(select(func.count(User.id)))
        total_proposals = await self._count(select(func.count(Proposal.id)))
        active_proposals = await self._count(
            select(func.count(Proposal.id)).where(Proposal.status == ProposalStatus.ACTIVE)
        )
        total_votes = await self._count(select(func.count(Vote.id)))
        total_comments = await self._count(
            select(func.count(Comment.id)).where(Comment.is_deleted.is_(False))
        )

        return GlobalStats(
            total_users=total_users,
            total_proposals=total_proposals,
            active_proposals=active_proposals,
            total_votes=total_votes,
            total_comments=total_comments,
            average_votes_per_user=total_votes / total_users if total_users else 0.0,
        )

    async def dashboard_stats(self) -> DashboardStats:
        """Global counters plus active users and the frustration barometer.

        The barometer is the percentage of Against votes among all votes.
        """
        stats = await self.global_stats()
        active_users = await self._count(
            select(func.count(User.id)).where(
                User.last_login_at >= days_ago(settings.active_user_window_days)
            )
        )
        against_votes = await self._count(
            select(func.count(Vote.id)).where(Vote.vote_type == VoteType.AGAINST)
        )

        return DashboardStats(
            **stats.model_dump(),
            active_users=active_users,
            frustration_meter=_percentage(against_votes, stats.total_votes),
        )

    async def contribution_level_distribution(self) -> ContributionLevelDistribution:
        """Return how many users hold each badge tier, lowest tier first."""
        result = await self.session.execute(
            select(User.contribution_level, func.count(User.id)).group_by(
                User.contribution_level
            )
        )
        counts = {level: int(count) for level, count in result.all()}
        total = sum(counts.values())

        return ContributionLevelDistribution(
            distribution=[
                ContributionLevelCount(
                    level=level,
                    user_count=counts.get(level, 0),
                    percentage=_percentage(counts.get(level, 0), total),
                )
                for level in ContributionLevel
            ]
        )

    async def top_contributors(self, take: int = 10) -> list[TopContributor]:
        vote_count = (
            select(func.count(Vote.id)).where(Vote.user_id == User.id).scalar_subquery()
        )
        proposal_count = (
            select(func.count(Proposal.id))
            .where(Proposal.created_by_id == User.id)
            .scalar_subquery()
        )
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.user_id == User.id, Comment.is_deleted.is_(False))
            .scalar_subquery()
        )
        result = await self.session.execute(
            select(User, vote_count, proposal_count, comment_count)
            .order_by(User.reputation_score.desc(), User.created_at.asc())
            .limit(take)
        )

        return [
            TopContributor(
                user_id=user.id,
                display_name=user.display_name or "Anonymous",
                contribution_level=user.contribution_level,
                reputation_score=user.reputation_score,
                vote_count=int(votes),
                proposal_count=int(proposals),
                comment_count=int(comments),
            )
            for user, votes, proposals, comments in result.all()
        ]

    async def voting_trends(self, days: int = 30) -> VotingTrends:
        """Return daily For/Against counts over the last ``days`` days."""
        day = func.date(Vote.voted_at)
        result = await self.session.execute(
            select(
                day,
                func.count(case((Vote.vote_type == VoteType.FOR, 1))),
                func.count(case((Vote.vote_type == VoteType.AGAINST, 1))),
            )
            .where(Vote.voted_at >= days_ago(days))
            .group_by(day)
            .order_by(day)
        )

        daily = [
            DailyVoteCount(
                day=_as_date(raw_day),
                votes_for=int(votes_for),
                votes_against=int(votes_against),
            )
            for raw_day, votes_for, votes_against in result.all()
        ]
        logger.debug("Computed voting trends over %d days (%d buckets)", days, len(daily))
        return VotingTrends(days=days, daily_votes=daily)


def _as_date(value: date | datetime | str) -> date:
    # SQLite returns date() as text; PostgreSQL returns a date.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)

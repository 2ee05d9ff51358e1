"""Analytics endpoints: dashboard counters, badges and leaderboards."""

from fastapi import APIRouter, Query

from nicolas_qui_paie.schemas.analytics import (
    ContributionLevelDistribution,
    DashboardStats,
    GlobalStats,
    TopContributor,
    VotingTrends,
)

from ..dependencies import AnalyticsServiceDep

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/global", response_model=GlobalStats)
async def get_global_stats(analytics: AnalyticsServiceDep) -> GlobalStats:
    return await analytics.global_stats()


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(analytics: AnalyticsServiceDep) -> DashboardStats:
    """Dashboard counters including the frustration barometer."""
    return await analytics.dashboard_stats()


@router.get("/contribution-levels", response_model=ContributionLevelDistribution)
async def get_contribution_levels(
    analytics: AnalyticsServiceDep,
) -> ContributionLevelDistribution:
    return await analytics.contribution_level_distribution()


@router.get("/top-contributors", response_model=list[TopContributor])
async def get_top_contributors(
    analytics: AnalyticsServiceDep,
    take: int = Query(10, ge=1, le=100),
) -> list[TopContributor]:
    return await analytics.top_contributors(take)


@router.get("/voting-trends", response_model=VotingTrends)
async def get_voting_trends(
    analytics: AnalyticsServiceDep,
    days: int = Query(30, ge=1, le=365),
) -> VotingTrends:
    return await analytics.voting_trends(days)

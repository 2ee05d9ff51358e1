"""Analytics response schemas."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from nicolas_qui_paie.models.enums import ContributionLevel


class GlobalStats(BaseModel):
    """Platform-wide counters."""

    total_users: int = 0
    total_proposals: int = 0
    active_proposals: int = 0
    total_votes: int = 0
    total_comments: int = 0
    average_votes_per_user: float = 0.0


class DashboardStats(GlobalStats):
    """Counters shown on the home dashboard."""

    active_users: int = 0
    frustration_meter: float = Field(
        0.0,
        description="Share of Against votes among all votes, in percent",
    )


class ContributionLevelCount(BaseModel):
    level: ContributionLevel
    user_count: int
    percentage: float


class ContributionLevelDistribution(BaseModel):
    distribution: list[ContributionLevelCount] = Field(default_factory=list)


class TopContributor(BaseModel):
    user_id: str
    display_name: str
    contribution_level: ContributionLevel
    reputation_score: int
    vote_count: int
    proposal_count: int
    comment_count: int


class DailyVoteCount(BaseModel):
    day: date
    votes_for: int
    votes_against: int

    @property
    def total_votes(self) -> int:
        return self.votes_for + self.votes_against


class VotingTrends(BaseModel):
    days: int
    daily_votes: list[DailyVoteCount] = Field(default_factory=list)

"""Contribution-level policy and reputation rules.

Everything here is pure: callers load and persist users themselves.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from nicolas_qui_paie.models.enums import ContributionLevel, VoteType

if TYPE_CHECKING:
    from nicolas_qui_paie.models.user import User

__all__ = [
    "LEVEL_THRESHOLDS",
    "Standing",
    "apply_reputation_delta",
    "level_for",
    "vote_cast_delta",
    "vote_removal_delta",
]

# Minimum reputation score for each tier, highest first.
LEVEL_THRESHOLDS: tuple[tuple[int, ContributionLevel], ...] = (
    (1000, ContributionLevel.NICOLAS_SUPREME),
    (500, ContributionLevel.GROS_NICOLAS),
    (100, ContributionLevel.GROS_MOYEN_NICOLAS),
    (0, ContributionLevel.PETIT_NICOLAS),
)

BASE_VOTE_POINTS = 1
FOR_VOTE_BONUS = 1
FOR_REMOVAL_PENALTY = 2
AGAINST_REMOVAL_PENALTY = 1


def level_for(reputation_score: int) -> ContributionLevel:
    """Return the badge tier for a reputation score.

    Negative scores clamp to the lowest tier.
    """
    for threshold, level in LEVEL_THRESHOLDS:
        if reputation_score >= threshold:
            return level
    return ContributionLevel.PETIT_NICOLAS


def vote_cast_delta(vote_type: VoteType) -> int:
    """Reputation earned by casting (or re-casting) a vote."""
    if vote_type is VoteType.FOR:
        return BASE_VOTE_POINTS + FOR_VOTE_BONUS
    return BASE_VOTE_POINTS


def vote_removal_delta(vote_type: VoteType) -> int:
    """Reputation change applied when a vote of ``vote_type`` is withdrawn."""
    if vote_type is VoteType.FOR:
        return -FOR_REMOVAL_PENALTY
    return -AGAINST_REMOVAL_PENALTY


@dataclass(frozen=True)
class Standing:
    """A user's reputation score together with the tier it implies."""

    reputation_score: int
    contribution_level: ContributionLevel

    @classmethod
    def of(cls, user: User) -> Standing:
        return cls(
            reputation_score=user.reputation_score,
            contribution_level=user.contribution_level,
        )


def apply_reputation_delta(standing: Standing, delta: int) -> Standing:
    """Return the standing after adding ``delta`` points.

    The score never drops below zero and the level is always re-derived
    from the new score.
    """
    score = max(0, standing.reputation_score + delta)
    return Standing(reputation_score=score, contribution_level=level_for(score))

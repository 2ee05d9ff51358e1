# tests/test_contribution.py
"""Tests for the contribution-level policy and reputation rules."""

import pytest

from nicolas_qui_paie.models import ContributionLevel, VoteType
from nicolas_qui_paie.services.contribution import (
    Standing,
    apply_reputation_delta,
    level_for,
    vote_cast_delta,
    vote_removal_delta,
)


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (0, ContributionLevel.PETIT_NICOLAS),
        (99, ContributionLevel.PETIT_NICOLAS),
        (100, ContributionLevel.GROS_MOYEN_NICOLAS),
        (499, ContributionLevel.GROS_MOYEN_NICOLAS),
        (500, ContributionLevel.GROS_NICOLAS),
        (999, ContributionLevel.GROS_NICOLAS),
        (1000, ContributionLevel.NICOLAS_SUPREME),
        (250_000, ContributionLevel.NICOLAS_SUPREME),
    ],
)
def test_level_thresholds(score: int, expected: ContributionLevel) -> None:
    assert level_for(score) is expected


def test_negative_score_clamps_to_lowest_level() -> None:
    assert level_for(-5) is ContributionLevel.PETIT_NICOLAS


def test_level_is_monotonic() -> None:
    """A higher score never yields a lower tier."""
    ranks = [level_for(score).rank for score in range(0, 1200)]
    assert ranks == sorted(ranks)


def test_vote_deltas() -> None:
    assert vote_cast_delta(VoteType.FOR) == 2
    assert vote_cast_delta(VoteType.AGAINST) == 1
    assert vote_removal_delta(VoteType.FOR) == -2
    assert vote_removal_delta(VoteType.AGAINST) == -1


def test_apply_delta_recomputes_level() -> None:
    before = Standing(reputation_score=99, contribution_level=ContributionLevel.PETIT_NICOLAS)
    after = apply_reputation_delta(before, 2)
    assert after == Standing(101, ContributionLevel.GROS_MOYEN_NICOLAS)


def test_apply_delta_demotes_on_penalty() -> None:
    before = Standing(reputation_score=100, contribution_level=ContributionLevel.GROS_MOYEN_NICOLAS)
    after = apply_reputation_delta(before, -2)
    assert after == Standing(98, ContributionLevel.PETIT_NICOLAS)


def test_apply_delta_floors_at_zero() -> None:
    before = Standing(reputation_score=1, contribution_level=ContributionLevel.PETIT_NICOLAS)
    after = apply_reputation_delta(before, -2)
    assert after.reputation_score == 0
    assert after.contribution_level is ContributionLevel.PETIT_NICOLAS


def test_standing_is_immutable() -> None:
    standing = Standing(reputation_score=0, contribution_level=ContributionLevel.PETIT_NICOLAS)
    with pytest.raises(AttributeError):
        standing.reputation_score = 10  # type: ignore[misc]

# mypy: ignore-errors
# tests/v1/test_analytics.py
"""Tests for analytics endpoints and the underlying aggregate queries."""

import pytest
from fastapi import status

from nicolas_qui_paie.db.time import utcnow
from nicolas_qui_paie.models import VoteType
from nicolas_qui_paie.schemas.vote import VoteCreate
from nicolas_qui_paie.services.analytics import AnalyticsService


async def _cast(voting_service, user, proposal, vote_type):
    await voting_service.cast_vote(
        VoteCreate(proposal_id=proposal.id, vote_type=vote_type), user.id
    )


@pytest.mark.asyncio
async def test_global_stats(client, voting_service, test_user, other_user, proposal) -> None:
    await _cast(voting_service, test_user, proposal, VoteType.FOR)
    await _cast(voting_service, other_user, proposal, VoteType.AGAINST)

    response = await client.get("/api/v1/analytics/global")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "total_users": 2,
        "total_proposals": 1,
        "active_proposals": 1,
        "total_votes": 2,
        "total_comments": 0,
        "average_votes_per_user": 1.0,
    }


@pytest.mark.asyncio
async def test_dashboard_frustration_meter(
    client, db_session, voting_service, make_user, proposal
) -> None:
    voters = [await make_user(f"Nicolas {i}") for i in range(4)]
    for i, voter in enumerate(voters):
        await _cast(voting_service, voter, proposal, VoteType.AGAINST if i else VoteType.FOR)
    voters[0].last_login_at = utcnow()
    await db_session.commit()

    response = await client.get("/api/v1/analytics/dashboard")
    body = response.json()
    assert body["frustration_meter"] == 75.0
    assert body["active_users"] == 1
    assert body["total_votes"] == 4


@pytest.mark.asyncio
async def test_dashboard_without_votes(client) -> None:
    response = await client.get("/api/v1/analytics/dashboard")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["frustration_meter"] == 0.0


@pytest.mark.asyncio
async def test_contribution_level_distribution(client, make_user) -> None:
    await make_user(reputation_score=0)
    await make_user(reputation_score=150)
    await make_user(reputation_score=2000)
    await make_user(reputation_score=5)

    response = await client.get("/api/v1/analytics/contribution-levels")
    distribution = response.json()["distribution"]
    assert [d["level"] for d in distribution] == [
        "PetitNicolas",
        "GrosMoyenNicolas",
        "GrosNicolas",
        "NicolasSupreme",
    ]
    assert [d["user_count"] for d in distribution] == [2, 1, 0, 1]
    assert distribution[0]["percentage"] == 50.0


@pytest.mark.asyncio
async def test_top_contributors(client, voting_service, make_user, proposal) -> None:
    leader = await make_user("Leader", reputation_score=600)
    follower = await make_user("Follower", reputation_score=10)
    await _cast(voting_service, follower, proposal, VoteType.FOR)

    response = await client.get("/api/v1/analytics/top-contributors", params={"take": 2})
    body = response.json()
    assert [c["user_id"] for c in body] == [leader.id, follower.id]
    assert body[0]["contribution_level"] == "GrosNicolas"
    assert body[1]["vote_count"] == 1
    assert body[1]["reputation_score"] == 12


@pytest.mark.asyncio
async def test_voting_trends(db_session, voting_service, test_user, other_user, proposal) -> None:
    await _cast(voting_service, test_user, proposal, VoteType.FOR)
    await _cast(voting_service, other_user, proposal, VoteType.AGAINST)

    trends = await AnalyticsService(db_session).voting_trends(days=7)

    assert trends.days == 7
    assert len(trends.daily_votes) == 1
    today = trends.daily_votes[0]
    assert today.day == utcnow().date()
    assert (today.votes_for, today.votes_against) == (1, 1)
    assert today.total_votes == 2


@pytest.mark.asyncio
async def test_voting_trends_endpoint_validates_days(client) -> None:
    response = await client.get("/api/v1/analytics/voting-trends", params={"days": 0})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

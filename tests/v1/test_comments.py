# mypy: ignore-errors
# tests/v1/test_comments.py
"""Tests for comment endpoints and the comment service."""

import pytest
from fastapi import status

from nicolas_qui_paie.schemas.comment import CommentCreate
from nicolas_qui_paie.services.comments import (
    CommentNotFoundError,
    CommentService,
    InvalidParentCommentError,
)


async def _post(client, headers, proposal_id, content="Tout à fait d'accord", **extra):
    payload = {"proposal_id": proposal_id, "content": content, **extra}
    return await client.post("/api/v1/comments/", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_create_comment(client, auth_token, proposal, test_user) -> None:
    response = await _post(client, auth_token, proposal.id)
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["content"] == "Tout à fait d'accord"
    assert body["user_id"] == test_user.id
    assert body["proposal_id"] == proposal.id
    assert body["parent_comment_id"] is None
    assert body["likes_count"] == 0
    assert body["is_deleted"] is False


@pytest.mark.asyncio
async def test_create_comment_requires_auth(client, proposal) -> None:
    response = await client.post(
        "/api/v1/comments/", json={"proposal_id": proposal.id, "content": "Anonyme"}
    )
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


@pytest.mark.asyncio
async def test_create_comment_on_missing_proposal(client, auth_token) -> None:
    response = await _post(client, auth_token, 9999)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_create_comment_rejects_blank_content(client, auth_token, proposal) -> None:
    response = await _post(client, auth_token, proposal.id, content="   ")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_reply_to_comment(client, auth_token, other_auth_token, proposal) -> None:
    parent = (await _post(client, auth_token, proposal.id)).json()

    response = await _post(
        client, other_auth_token, proposal.id, "Pas moi", parent_comment_id=parent["id"]
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["parent_comment_id"] == parent["id"]


@pytest.mark.asyncio
async def test_reply_must_stay_on_same_proposal(
    client, auth_token, proposal, make_proposal
) -> None:
    other = await make_proposal("Supprimer la redevance")
    parent = (await _post(client, auth_token, proposal.id)).json()

    response = await _post(client, auth_token, other.id, parent_comment_id=parent["id"])
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_list_comments_oldest_first(client, auth_token, other_auth_token, proposal) -> None:
    await _post(client, auth_token, proposal.id, "Premier")
    await _post(client, other_auth_token, proposal.id, "Second")

    response = await client.get(f"/api/v1/comments/proposal/{proposal.id}")
    assert response.status_code == status.HTTP_200_OK
    assert [c["content"] for c in response.json()] == ["Premier", "Second"]


@pytest.mark.asyncio
async def test_update_comment(client, auth_token, proposal) -> None:
    created = (await _post(client, auth_token, proposal.id)).json()

    response = await client.put(
        f"/api/v1/comments/{created['id']}", json={"content": "Modifié"}, headers=auth_token
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["content"] == "Modifié"
    assert response.json()["updated_at"] is not None


@pytest.mark.asyncio
async def test_update_requires_ownership(client, auth_token, other_auth_token, proposal) -> None:
    created = (await _post(client, auth_token, proposal.id)).json()

    response = await client.put(
        f"/api/v1/comments/{created['id']}", json={"content": "Pirate"}, headers=other_auth_token
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_delete_hides_comment(client, auth_token, proposal) -> None:
    created = (await _post(client, auth_token, proposal.id)).json()

    response = await client.delete(f"/api/v1/comments/{created['id']}", headers=auth_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    listing = await client.get(f"/api/v1/comments/proposal/{proposal.id}")
    assert listing.json() == []
    again = await client.delete(f"/api/v1/comments/{created['id']}", headers=auth_token)
    assert again.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_like_is_idempotent(client, auth_token, other_auth_token, proposal) -> None:
    created = (await _post(client, auth_token, proposal.id)).json()
    url = f"/api/v1/comments/{created['id']}/like"

    first = await client.post(url, headers=other_auth_token)
    second = await client.post(url, headers=other_auth_token)
    assert first.json()["likes_count"] == 1
    assert second.json()["likes_count"] == 1

    mine = await client.post(url, headers=auth_token)
    assert mine.json()["likes_count"] == 2


@pytest.mark.asyncio
async def test_unlike(client, auth_token, other_auth_token, proposal) -> None:
    created = (await _post(client, auth_token, proposal.id)).json()
    url = f"/api/v1/comments/{created['id']}/like"
    await client.post(url, headers=other_auth_token)

    response = await client.delete(url, headers=other_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["likes_count"] == 0

    unchanged = await client.delete(url, headers=other_auth_token)
    assert unchanged.json()["likes_count"] == 0


@pytest.mark.asyncio
async def test_like_missing_comment(client, auth_token) -> None:
    response = await client.post("/api/v1/comments/9999/like", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_comment_counters_in_analytics(client, auth_token, other_auth_token, proposal) -> None:
    await _post(client, auth_token, proposal.id, "Gardé")
    removed = (await _post(client, other_auth_token, proposal.id, "Retiré")).json()
    await client.delete(f"/api/v1/comments/{removed['id']}", headers=other_auth_token)

    stats = await client.get("/api/v1/analytics/global")
    assert stats.json()["total_comments"] == 1

    top = await client.get("/api/v1/analytics/top-contributors")
    counts = {c["user_id"]: c["comment_count"] for c in top.json()}
    assert sorted(counts.values()) == [0, 1]


@pytest.mark.asyncio
async def test_reply_to_deleted_comment_rejected(db_session, test_user, proposal) -> None:
    service = CommentService(db_session)
    parent = await service.create(
        CommentCreate(proposal_id=proposal.id, content="Bientôt retiré"), test_user.id
    )
    await service.delete(parent.id, test_user.id)

    with pytest.raises(InvalidParentCommentError):
        await service.create(
            CommentCreate(proposal_id=proposal.id, content="Trop tard", parent_comment_id=parent.id),
            test_user.id,
        )
    with pytest.raises(CommentNotFoundError):
        await service.like(parent.id, test_user.id)

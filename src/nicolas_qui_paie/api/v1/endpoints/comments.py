# src/nicolas_qui_paie/api/v1/endpoints/comments.py
"""Comment endpoints: discussion threads under proposals."""

from typing import NoReturn

from fastapi import APIRouter, HTTPException, Response, status

from nicolas_qui_paie.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from nicolas_qui_paie.services.comments import (
    CommentError,
    CommentNotFoundError,
    CommentPermissionError,
    ProposalForCommentNotFoundError,
)

from ..dependencies import CommentServiceDep, CurrentUserDep

router = APIRouter(prefix="/comments", tags=["comments"])


def _raise_http(err: CommentError) -> NoReturn:
    if isinstance(err, (CommentNotFoundError, ProposalForCommentNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(err, CommentPermissionError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    raise HTTPException(status_code=code, detail=str(err)) from err


@router.get("/proposal/{proposal_id}", response_model=list[CommentResponse])
async def list_proposal_comments(
    proposal_id: int,
    comment_service: CommentServiceDep,
) -> list[CommentResponse]:
    """List the visible comments of a proposal, oldest first."""
    comments = await comment_service.list_for_proposal(proposal_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=CommentResponse)
async def create_comment(
    data: CommentCreate,
    current_user: CurrentUserDep,
    comment_service: CommentServiceDep,
) -> CommentResponse:
    try:
        comment = await comment_service.create(data, current_user.id)
    except CommentError as err:
        _raise_http(err)
    return CommentResponse.model_validate(comment)


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    data: CommentUpdate,
    current_user: CurrentUserDep,
    comment_service: CommentServiceDep,
) -> CommentResponse:
    try:
        comment = await comment_service.update(comment_id, data, current_user.id)
    except CommentError as err:
        _raise_http(err)
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    comment_service: CommentServiceDep,
) -> Response:
    try:
        await comment_service.delete(comment_id, current_user.id)
    except CommentError as err:
        _raise_http(err)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{comment_id}/like", response_model=CommentResponse)
async def like_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    comment_service: CommentServiceDep,
) -> CommentResponse:
    try:
        comment = await comment_service.like(comment_id, current_user.id)
    except CommentError as err:
        _raise_http(err)
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}/like", response_model=CommentResponse)
async def unlike_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    comment_service: CommentServiceDep,
) -> CommentResponse:
    try:
        comment = await comment_service.unlike(comment_id, current_user.id)
    except CommentError as err:
        _raise_http(err)
    return CommentResponse.model_validate(comment)

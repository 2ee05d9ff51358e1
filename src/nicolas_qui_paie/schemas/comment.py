# src/nicolas_qui_paie/schemas/comment.py
"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentUpdate(BaseModel):
    """Schema for editing the text of a comment."""

    content: str = Field(..., min_length=1, max_length=1000)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Comment content is required")
        return value


class CommentCreate(CommentUpdate):
    """Schema for posting a comment or a reply."""

    proposal_id: int = Field(..., ge=1)
    parent_comment_id: int | None = Field(None, ge=1, description="Comment being replied to")


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    content: str
    created_at: datetime
    updated_at: datetime | None
    likes_count: int
    user_id: str
    proposal_id: int
    parent_comment_id: int | None
    is_deleted: bool

    model_config = ConfigDict(from_attributes=True)

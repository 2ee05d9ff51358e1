# src/nicolas_qui_paie/schemas/proposal.py
"""Proposal and category Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from nicolas_qui_paie.models.enums import ProposalStatus


class ProposalCreate(BaseModel):
    """Schema for submitting a new proposal."""

    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10, max_length=5000)
    category_id: int = Field(..., ge=1)
    image_url: str | None = Field(None, max_length=500)
    tags: str | None = Field(None, max_length=500, description="Comma-separated tags")


class ProposalUpdate(ProposalCreate):
    """Schema for editing a proposal; every field is replaced."""


class ProposalStatusUpdate(BaseModel):
    """Schema for moving a proposal through its lifecycle."""

    status: ProposalStatus


class ProposalResponse(BaseModel):
    """Schema for proposal information returned by the API."""

    id: int
    title: str
    description: str
    status: ProposalStatus
    created_at: datetime
    updated_at: datetime | None
    closed_at: datetime | None
    votes_for: int
    votes_against: int
    total_votes: int
    approval_rate: float
    views_count: int
    is_featured: bool
    is_hot: bool
    image_url: str | None
    tags: str | None
    created_by_id: str
    category_id: int

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: int
    name: str
    description: str
    color: str
    icon_class: str
    sort_order: int

    model_config = ConfigDict(from_attributes=True)

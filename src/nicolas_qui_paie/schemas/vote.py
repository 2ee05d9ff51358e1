# src/nicolas_qui_paie/schemas/vote.py
"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from nicolas_qui_paie.models.enums import VoteType


class VoteCreate(BaseModel):
    """Schema for casting or changing a vote."""

    proposal_id: int = Field(..., ge=1)
    vote_type: VoteType = Field(..., description="'for' or 'against'")
    comment: str | None = Field(None, max_length=500, description="Optional justification")


class VoteResponse(BaseModel):
    """Schema for vote information returned by the API."""

    id: int
    user_id: str
    proposal_id: int
    vote_type: VoteType
    weight: int
    comment: str | None
    voted_at: datetime

    model_config = ConfigDict(from_attributes=True)

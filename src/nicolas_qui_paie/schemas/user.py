# src/nicolas_qui_paie/schemas/user.py
"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from nicolas_qui_paie.models.enums import ContributionLevel


class UserResponse(BaseModel):
    """Public profile of a user, including their badge."""

    id: str
    display_name: str | None
    reputation_score: int
    contribution_level: ContributionLevel
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

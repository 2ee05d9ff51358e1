"""User profile endpoints."""

from fastapi import APIRouter

from nicolas_qui_paie.schemas.user import UserResponse

from ..dependencies import CurrentUserDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentUserDep) -> UserResponse:
    """Return the caller's profile, reputation and badge."""
    return UserResponse.model_validate(current_user)

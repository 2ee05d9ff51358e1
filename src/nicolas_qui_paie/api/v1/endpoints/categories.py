"""Category endpoints for the Nicolas Qui Paie API."""

from fastapi import APIRouter

from nicolas_qui_paie.schemas.proposal import CategoryResponse

from ..dependencies import ProposalServiceDep

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=list[CategoryResponse])
async def list_categories(proposal_service: ProposalServiceDep) -> list[CategoryResponse]:
    """List active categories in display order."""
    categories = await proposal_service.list_categories()
    return [CategoryResponse.model_validate(c) for c in categories]

from fastapi import APIRouter, Depends

from app.api.v1.dependency import AdminPrincipal
from app.api.v1.routers.category import get_taxonomy_service
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.taxonomy import SeedOut
from app.domain.catalog.taxonomy.taxonomy_domain import TaxonomyService

router = APIRouter(prefix="/admin/seed", tags=["Admin"])


@router.post("/seed_taxonomy")
async def seed_taxonomy(
    admin: AdminPrincipal,
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[SeedOut]:
    """Insert the default categories and themes. Safe to call repeatedly."""
    result = await service.seed_taxonomy()
    return ApiOut[SeedOut](results=SeedOut.model_validate(result.model_dump()))

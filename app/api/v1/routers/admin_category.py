from fastapi import APIRouter, Depends

from app.api.v1.dependency import AdminPrincipal
from app.api.v1.routers.category import get_taxonomy_service
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.taxonomy import (
    CategoryIdIn,
    CategoryOut,
    CreateCategoryIn,
    DeleteTaxonomyOut,
    UpdateCategoryIn,
)
from app.domain.catalog.taxonomy.taxonomy_domain import TaxonomyService
from app.domain.catalog.taxonomy.taxonomy_models import CategoryParams

router = APIRouter(prefix="/admin/category", tags=["Admin"])


@router.post("/create_category")
async def create_category(
    body: CreateCategoryIn,
    admin: AdminPrincipal,
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[CategoryOut]:
    result = await service.create_category(CategoryParams(**body.model_dump()))
    return ApiOut[CategoryOut](results=CategoryOut.model_validate(result.model_dump()))


@router.post("/update_category")
async def update_category(
    body: UpdateCategoryIn,
    admin: AdminPrincipal,
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[CategoryOut]:
    params = CategoryParams(**body.model_dump(exclude={"category_id"}))
    result = await service.update_category(body.category_id, params)
    return ApiOut[CategoryOut](results=CategoryOut.model_validate(result.model_dump()))


@router.post("/delete_category")
async def delete_category(
    body: CategoryIdIn,
    admin: AdminPrincipal,
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[DeleteTaxonomyOut]:
    """Sessions in the category are kept with no category."""
    detached = await service.delete_category(body.category_id)
    return ApiOut[DeleteTaxonomyOut](results=DeleteTaxonomyOut(sessions_detached=detached))

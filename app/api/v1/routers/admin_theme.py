from fastapi import APIRouter, Depends

from app.api.v1.dependency import AdminPrincipal
from app.api.v1.routers.category import get_taxonomy_service
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.taxonomy import (
    CreateThemeIn,
    DeleteTaxonomyOut,
    ThemeIdIn,
    ThemeOut,
    UpdateThemeIn,
)
from app.domain.catalog.taxonomy.taxonomy_domain import TaxonomyService
from app.domain.catalog.taxonomy.taxonomy_models import ThemeParams

router = APIRouter(prefix="/admin/theme", tags=["Admin"])


@router.post("/create_theme")
async def create_theme(
    body: CreateThemeIn,
    admin: AdminPrincipal,
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[ThemeOut]:
    result = await service.create_theme(ThemeParams(**body.model_dump()))
    return ApiOut[ThemeOut](results=ThemeOut.model_validate(result.model_dump()))


@router.post("/update_theme")
async def update_theme(
    body: UpdateThemeIn,
    admin: AdminPrincipal,
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[ThemeOut]:
    params = ThemeParams(**body.model_dump(exclude={"theme_id"}))
    result = await service.update_theme(body.theme_id, params)
    return ApiOut[ThemeOut](results=ThemeOut.model_validate(result.model_dump()))


@router.post("/delete_theme")
async def delete_theme(
    body: ThemeIdIn,
    admin: AdminPrincipal,
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[DeleteTaxonomyOut]:
    detached = await service.delete_theme(body.theme_id)
    return ApiOut[DeleteTaxonomyOut](results=DeleteTaxonomyOut(sessions_detached=detached))

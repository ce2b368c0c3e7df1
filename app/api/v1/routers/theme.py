from fastapi import APIRouter, Depends

from app.api.v1.routers.category import get_taxonomy_service
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.taxonomy import ListThemesOut, ThemeOut
from app.domain.catalog.taxonomy.taxonomy_domain import TaxonomyService

router = APIRouter(prefix="/theme")


@router.get("/list_themes")
async def list_themes(
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[ListThemesOut]:
    themes = await service.list_themes()
    return ApiOut[ListThemesOut](
        results=ListThemesOut(themes=[ThemeOut.model_validate(t.model_dump()) for t in themes])
    )

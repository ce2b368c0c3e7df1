from fastapi import APIRouter, Depends

from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.taxonomy import CategoryOut, ListCategoriesOut
from app.domain.catalog.taxonomy.taxonomy_domain import TaxonomyService

router = APIRouter(prefix="/category")

# Singleton instance
_taxonomy_service = TaxonomyService()


def get_taxonomy_service() -> TaxonomyService:
    """Get the singleton TaxonomyService instance."""
    return _taxonomy_service


@router.get("/list_categories")
async def list_categories(
    service: TaxonomyService = Depends(get_taxonomy_service),
) -> ApiOut[ListCategoriesOut]:
    """Categories ordered by their display order, then name."""
    categories = await service.list_categories()
    return ApiOut[ListCategoriesOut](
        results=ListCategoriesOut(
            categories=[CategoryOut.model_validate(c.model_dump()) for c in categories]
        )
    )

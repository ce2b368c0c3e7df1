from fastapi import APIRouter, Depends, Query

from app.api.v1.dependency import CurrentPrincipal, OptionalPrincipal
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.favorite import (
    FavoriteIdsOut,
    FavoriteIn,
    FavoriteItemOut,
    FavoriteStateOut,
    ListFavoritesOut,
    ToggleFavoriteIn,
)
from app.domain.favorites.favorite_domain import FavoriteService

router = APIRouter(prefix="/favorite")

# Singleton instance
_favorite_service = FavoriteService()


def get_favorite_service() -> FavoriteService:
    """Get the singleton FavoriteService instance."""
    return _favorite_service


@router.get("/list_favorites")
async def list_favorites(
    user: CurrentPrincipal,
    service: FavoriteService = Depends(get_favorite_service),
) -> ApiOut[ListFavoritesOut]:
    items = await service.list_favorites(user.user_id)
    return ApiOut[ListFavoritesOut](
        results=ListFavoritesOut(
            favorites=[FavoriteItemOut.model_validate(i.model_dump()) for i in items]
        )
    )


@router.get("/list_favorite_ids")
async def list_favorite_ids(
    user: CurrentPrincipal,
    service: FavoriteService = Depends(get_favorite_service),
) -> ApiOut[FavoriteIdsOut]:
    ids = await service.favorite_ids(user.user_id)
    return ApiOut[FavoriteIdsOut](results=FavoriteIdsOut(session_ids=ids))


@router.get("/is_favorite")
async def is_favorite(
    user: OptionalPrincipal,
    session_id: str = Query(..., description="Session identifier"),
    service: FavoriteService = Depends(get_favorite_service),
) -> ApiOut[FavoriteStateOut]:
    """Always false for anonymous callers."""
    value = await service.is_favorite(user.user_id if user else None, session_id)
    return ApiOut[FavoriteStateOut](
        results=FavoriteStateOut(session_id=session_id, is_favorite=value)
    )


@router.post("/add_favorite")
async def add_favorite(
    body: FavoriteIn,
    user: CurrentPrincipal,
    service: FavoriteService = Depends(get_favorite_service),
) -> ApiOut[FavoriteStateOut]:
    state = await service.add_favorite(user.user_id, body.session_id)
    return ApiOut[FavoriteStateOut](results=FavoriteStateOut.model_validate(state.model_dump()))


@router.post("/remove_favorite")
async def remove_favorite(
    body: FavoriteIn,
    user: CurrentPrincipal,
    service: FavoriteService = Depends(get_favorite_service),
) -> ApiOut[FavoriteStateOut]:
    state = await service.remove_favorite(user.user_id, body.session_id)
    return ApiOut[FavoriteStateOut](results=FavoriteStateOut.model_validate(state.model_dump()))


@router.post("/toggle_favorite")
async def toggle_favorite(
    body: ToggleFavoriteIn,
    user: OptionalPrincipal,
    service: FavoriteService = Depends(get_favorite_service),
) -> ApiOut[FavoriteStateOut]:
    """Anonymous callers get is_favorite=false and nothing is stored."""
    state = await service.toggle_favorite(
        user.user_id if user else None, body.session_id, body.currently_favorite
    )
    return ApiOut[FavoriteStateOut](results=FavoriteStateOut.model_validate(state.model_dump()))

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependency import CurrentPrincipal
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.watch_history import ListHistoryOut, RecordProgressIn, WatchHistoryOut
from app.domain.history.watch_history_domain import WatchHistoryService
from app.domain.history.watch_history_models import RecordProgressParams

router = APIRouter(prefix="/watch_history")

# Singleton instance
_watch_history_service = WatchHistoryService()


def get_watch_history_service() -> WatchHistoryService:
    """Get the singleton WatchHistoryService instance."""
    return _watch_history_service


@router.get("/list_history")
async def list_history(
    user: CurrentPrincipal,
    service: WatchHistoryService = Depends(get_watch_history_service),
    limit: int = Query(50, ge=1, le=200, description="Number of items"),
) -> ApiOut[ListHistoryOut]:
    items = await service.list_history(user.user_id, limit=limit)
    return ApiOut[ListHistoryOut](
        results=ListHistoryOut(
            history=[WatchHistoryOut.model_validate(i.model_dump()) for i in items]
        )
    )


@router.post("/record_progress")
async def record_progress(
    body: RecordProgressIn,
    user: CurrentPrincipal,
    service: WatchHistoryService = Depends(get_watch_history_service),
) -> ApiOut[WatchHistoryOut]:
    item = await service.record_progress(user.user_id, RecordProgressParams(**body.model_dump()))
    return ApiOut[WatchHistoryOut](results=WatchHistoryOut.model_validate(item.model_dump()))

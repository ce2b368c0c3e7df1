from fastapi import APIRouter, Depends, Query

from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.session import (
    LiveScheduleOut,
    SessionOut,
    StreamingNowOut,
    VideoListOut,
)
from app.domain.catalog.session.session_domain import SessionService
from app.domain.catalog.session.session_models import VideoListParams
from app.schemas.session import Difficulty
from app.services.app_services import get_session_service as _build_session_service

router = APIRouter(prefix="/session")

# Singleton instance
_session_service = _build_session_service()


def get_session_service() -> SessionService:
    """Get the singleton SessionService instance."""
    return _session_service


@router.get("/list_videos")
async def list_videos(
    service: SessionService = Depends(get_session_service),
    category_id: str | None = Query(None),
    theme_id: str | None = Query(None),
    difficulty: Difficulty | None = Query(None),
    order: str = Query("newest", pattern="^(newest|oldest)$"),
    limit: int = Query(20, ge=1, le=100, description="Number of items per page"),
    offset: int = Query(0, ge=0),
) -> ApiOut[VideoListOut]:
    """Published on-demand videos. Live sessions are never listed here."""
    params = VideoListParams(
        category_id=category_id,
        theme_id=theme_id,
        difficulty=difficulty,
        order=order,  # type: ignore[arg-type]
        limit=limit,
        offset=offset,
    )
    result = await service.list_videos(params)
    return ApiOut[VideoListOut](results=VideoListOut.model_validate(result.model_dump()))


@router.get("/live_schedule")
async def live_schedule(
    service: SessionService = Depends(get_session_service),
) -> ApiOut[LiveScheduleOut]:
    result = await service.live_schedule()
    return ApiOut[LiveScheduleOut](results=LiveScheduleOut.model_validate(result.model_dump()))


@router.get("/get_session")
async def get_session(
    session_id: str = Query(..., description="Session identifier"),
    service: SessionService = Depends(get_session_service),
) -> ApiOut[SessionOut]:
    result = await service.get_session(session_id)
    return ApiOut[SessionOut](results=SessionOut.model_validate(result.model_dump()))


@router.get("/streaming_now")
async def streaming_now(
    service: SessionService = Depends(get_session_service),
) -> ApiOut[StreamingNowOut]:
    result = await service.streaming_now()
    session = SessionOut.model_validate(result.model_dump()) if result else None
    return ApiOut[StreamingNowOut](results=StreamingNowOut(session=session))

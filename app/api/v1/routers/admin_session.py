from fastapi import APIRouter, Depends

from app.api.v1.dependency import AdminPrincipal
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.session import (
    AdminSessionListOut,
    DeleteSessionOut,
    SaveSessionIn,
    SessionIdIn,
    SessionOut,
    SetPublishedIn,
    UpdateSessionIn,
)
from app.domain.catalog.session.session_domain import SessionService
from app.domain.catalog.session.session_models import SessionSaveParams
from app.services.app_services import get_session_service as _build_session_service

router = APIRouter(prefix="/admin/session", tags=["Admin"])

# Singleton instance
_session_service = _build_session_service()


def get_admin_session_service() -> SessionService:
    """Get the singleton SessionService instance."""
    return _session_service


def _out(result) -> SessionOut:
    return SessionOut.model_validate(result.model_dump())


@router.get("/list_sessions")
async def list_sessions(
    admin: AdminPrincipal,
    service: SessionService = Depends(get_admin_session_service),
) -> ApiOut[AdminSessionListOut]:
    """Every session including drafts, with categories and themes for the editor."""
    result = await service.admin_list()
    return ApiOut[AdminSessionListOut](
        results=AdminSessionListOut.model_validate(result.model_dump())
    )


@router.post("/create_session")
async def create_session(
    body: SaveSessionIn,
    admin: AdminPrincipal,
    service: SessionService = Depends(get_admin_session_service),
) -> ApiOut[SessionOut]:
    result = await service.create_session(SessionSaveParams(**body.model_dump()))
    return ApiOut[SessionOut](results=_out(result))


@router.post("/update_session")
async def update_session(
    body: UpdateSessionIn,
    admin: AdminPrincipal,
    service: SessionService = Depends(get_admin_session_service),
) -> ApiOut[SessionOut]:
    params = SessionSaveParams(**body.model_dump(exclude={"session_id"}))
    result = await service.update_session(body.session_id, params)
    return ApiOut[SessionOut](results=_out(result))


@router.post("/set_published")
async def set_published(
    body: SetPublishedIn,
    admin: AdminPrincipal,
    service: SessionService = Depends(get_admin_session_service),
) -> ApiOut[SessionOut]:
    result = await service.set_published(body.session_id, body.is_published)
    return ApiOut[SessionOut](results=_out(result))


@router.post("/go_live")
async def go_live(
    body: SessionIdIn,
    admin: AdminPrincipal,
    service: SessionService = Depends(get_admin_session_service),
) -> ApiOut[SessionOut]:
    """Make this the only session streaming now."""
    result = await service.go_live(body.session_id)
    return ApiOut[SessionOut](results=_out(result))


@router.post("/end_stream")
async def end_stream(
    body: SessionIdIn,
    admin: AdminPrincipal,
    service: SessionService = Depends(get_admin_session_service),
) -> ApiOut[SessionOut]:
    result = await service.end_stream(body.session_id)
    return ApiOut[SessionOut](results=_out(result))


@router.post("/delete_session")
async def delete_session(
    body: SessionIdIn,
    admin: AdminPrincipal,
    service: SessionService = Depends(get_admin_session_service),
) -> ApiOut[DeleteSessionOut]:
    result = await service.delete_session(body.session_id)
    return ApiOut[DeleteSessionOut](results=DeleteSessionOut.model_validate(result.model_dump()))

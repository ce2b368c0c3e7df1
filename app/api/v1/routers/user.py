from fastapi import APIRouter, Depends, Request

from app.api.v1.dependency import AdminPrincipal, CurrentPrincipal, bearer_token, get_admin_gate
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.user import (
    AdminStatusOut,
    BootstrapAdminIn,
    CheckAdminOut,
    ListUsersOut,
    SetAdminIn,
    UserOut,
)
from app.domain.auth.admin_domain import AdminService
from app.domain.auth.admin_gate import AdminGate
from app.services.api_rate_limiter import admin_claim_rate_limit
from app.services.app_services import get_admin_service as _build_admin_service
from app.shared.api.utils import verify_api_key

router = APIRouter(prefix="/user")

# Singleton instance
_admin_service = _build_admin_service()


def get_admin_service() -> AdminService:
    """Get the singleton AdminService instance."""
    return _admin_service


@router.get("/check_admin")
async def check_admin(
    request: Request,
    gate: AdminGate = Depends(get_admin_gate),
) -> ApiOut[CheckAdminOut]:
    """Never fails: anonymous or invalid callers are simply not admin."""
    is_admin = await gate.check_admin(bearer_token(request))
    return ApiOut[CheckAdminOut](results=CheckAdminOut(is_admin=is_admin))


@router.post("/claim_admin")
@admin_claim_rate_limit()
async def claim_admin(
    request: Request,
    user: CurrentPrincipal,
    service: AdminService = Depends(get_admin_service),
) -> ApiOut[AdminStatusOut]:
    """Become the first admin. Fails once any admin exists."""
    result = await service.claim_admin(user.user_id, user.email)
    return ApiOut[AdminStatusOut](results=AdminStatusOut.model_validate(result.model_dump()))


@router.get("/list_users")
async def list_users(
    admin: AdminPrincipal,
    service: AdminService = Depends(get_admin_service),
) -> ApiOut[ListUsersOut]:
    users = await service.list_users()
    return ApiOut[ListUsersOut](
        results=ListUsersOut(users=[UserOut.model_validate(u.model_dump()) for u in users])
    )


@router.post("/set_admin")
async def set_admin(
    body: SetAdminIn,
    admin: AdminPrincipal,
    service: AdminService = Depends(get_admin_service),
) -> ApiOut[AdminStatusOut]:
    result = await service.set_admin(body.user_id, body.is_admin)
    return ApiOut[AdminStatusOut](results=AdminStatusOut.model_validate(result.model_dump()))


@router.post("/bootstrap_admin", tags=["Internal"], dependencies=[Depends(verify_api_key)])
@admin_claim_rate_limit()
async def bootstrap_admin(
    request: Request,
    body: BootstrapAdminIn,
    service: AdminService = Depends(get_admin_service),
) -> ApiOut[AdminStatusOut]:
    """Grant admin to an existing user by email, only while no admin exists."""
    result = await service.bootstrap_admin_by_email(body.email)
    return ApiOut[AdminStatusOut](results=AdminStatusOut.model_validate(result.model_dump()))

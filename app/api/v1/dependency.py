from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from loguru import logger

from app.app_config import get_app_environ_config
from app.domain.auth.admin_gate import AdminGate
from app.domain.auth.principal import Principal
from app.services.integrations.identity_service import get_identity_service
from app.utils.app_errors import AppError


def bearer_token(request: Request) -> str | None:
    """Extract the bearer credential. Never log it."""
    header = request.headers.get("authorization") or ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@lru_cache
def get_admin_gate() -> AdminGate:
    return AdminGate(
        identity=get_identity_service(),
        claim_max_age_seconds=get_app_environ_config().ADMIN_CLAIM_MAX_AGE_SECONDS,
    )


async def get_current_principal(
    request: Request, gate: AdminGate = Depends(get_admin_gate)
) -> Principal:
    principal = await gate.resolve(bearer_token(request))
    logger.debug("Authenticated user_id: {}", principal.user_id)
    return principal


async def get_optional_principal(
    request: Request, gate: AdminGate = Depends(get_admin_gate)
) -> Principal | None:
    """Signed-in principal, or None for anonymous or invalid credentials."""
    token = bearer_token(request)
    if not token:
        return None
    try:
        return await gate.resolve(token)
    except AppError:
        return None


async def get_admin_principal(
    request: Request, gate: AdminGate = Depends(get_admin_gate)
) -> Principal:
    principal = await gate.require_admin(bearer_token(request))
    logger.debug("Admin user_id: {}", principal.user_id)
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipal = Annotated[Principal | None, Depends(get_optional_principal)]
AdminPrincipal = Annotated[Principal, Depends(get_admin_principal)]

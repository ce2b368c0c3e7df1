"""Admin authorization gate.

Every admin-only operation re-resolves the caller on each request; the
decision is never cached beyond the request.
"""

from loguru import logger

from app.services.integrations.identity_service import IdentityService
from app.utils.app_errors import AppError, AppErrorCode, forbidden, unauthorized

from .principal import Principal


class AdminGate:
    def __init__(self, identity: IdentityService, claim_max_age_seconds: int):
        self.identity = identity
        self.claim_max_age_seconds = claim_max_age_seconds

    async def resolve(self, token: str | None) -> Principal:
        """Resolve the caller. Raises Unauthorized when missing or invalid."""
        if not token:
            raise unauthorized("Missing bearer token")

        verified = await self.identity.verify_token(token)
        if verified is None:
            raise unauthorized()
        return Principal.from_token(verified)

    async def is_admin(self, principal: Principal) -> bool:
        if principal.has_fresh_admin_claim(self.claim_max_age_seconds):
            return True
        if principal.authoritative:
            return principal.admin_claim

        # Claim absent, false or stale in the token: ask the provider
        user = await self.identity.get_principal(principal.user_id)
        return bool(user and user.is_admin)

    async def require_admin(self, token: str | None) -> Principal:
        principal = await self.resolve(token)
        if not await self.is_admin(principal):
            logger.info("admin required: user={} denied", principal.user_id)
            raise forbidden("Admin access required", AppErrorCode.E_ADMIN_REQUIRED)
        return principal

    async def check_admin(self, token: str | None) -> bool:
        """Like require_admin but reports False on any failure instead of raising."""
        try:
            principal = await self.resolve(token)
            return await self.is_admin(principal)
        except AppError as e:
            logger.debug("check_admin -> false: {}", e)
            return False

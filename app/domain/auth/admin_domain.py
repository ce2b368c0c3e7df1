"""Admin bootstrap and role management.

Self-service bootstrap grants admin to at most one principal. The provider
is first checked for any existing admin, then the single-row `admin_claim`
record is taken with an insert (unique key) or a version compare-and-swap.
Only the winner of that write has its `is_admin` metadata set.
"""

from datetime import timedelta

from beanie.odm.operators.update.general import Set
from loguru import logger
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.schemas import AdminClaim, Profile
from app.schemas.admin_claim import BOOTSTRAP_CLAIM_KEY
from app.schemas.schema_utils import utc_now
from app.services.integrations.identity_service import (
    ADMIN_CLAIM_KEY,
    IdentityService,
    IdentityUser,
)
from app.utils.app_errors import AppError, AppErrorCode, forbidden, not_found

from .admin_models import AdminStatus, UserInfo


def _admin_exists() -> AppError:
    return forbidden("Admin already exists", AppErrorCode.E_ADMIN_EXISTS)


class AdminService:
    def __init__(self, identity: IdentityService, bootstrap_grace_seconds: int = 120):
        self.identity = identity
        self.bootstrap_grace_seconds = bootstrap_grace_seconds

    # ==================== BOOTSTRAP ====================

    async def claim_admin(self, user_id: str, email: str | None = None) -> AdminStatus:
        """Grant admin to the caller if and only if no admin exists yet."""
        principals = await self.identity.list_principals()
        if any(p.is_admin for p in principals):
            logger.info("claim_admin rejected: admin exists (caller={})", user_id)
            raise _admin_exists()

        claim = await self._acquire_claim(user_id)

        try:
            await self.identity.set_claim(user_id, ADMIN_CLAIM_KEY, True)
        except AppError:
            await self._release_claim(claim, user_id)
            raise

        logger.info("claim_admin granted user={}", user_id)
        await self._mirror_profile(user_id, email, True)
        return AdminStatus(user_id=user_id, is_admin=True)

    async def bootstrap_admin_by_email(self, email: str) -> AdminStatus:
        user = await self.identity.find_principal_by_email(email)
        if user is None:
            raise not_found(AppErrorCode.E_USER_NOT_FOUND, f"User not found: {email}")
        return await self.claim_admin(user.id, user.email)

    async def _acquire_claim(self, user_id: str) -> AdminClaim:
        existing = await AdminClaim.find_one(AdminClaim.claim_key == BOOTSTRAP_CLAIM_KEY)

        if existing is None:
            claim = AdminClaim(user_id=user_id)
            try:
                await claim.insert()
            except DuplicateKeyError as e:
                logger.info("claim_admin lost insert race (caller={})", user_id)
                raise _admin_exists() from e
            return claim

        if existing.user_id == user_id:
            # Retry by the holder after an interrupted grant
            return existing

        if existing.user_id is not None and not await self._holder_lapsed(existing):
            raise _admin_exists()

        return await self._take_over_claim(existing, user_id)

    async def _holder_lapsed(self, claim: AdminClaim) -> bool:
        """A holder that never became admin within the grace period gives up the claim."""
        if utc_now() - claim.claimed_at < timedelta(seconds=self.bootstrap_grace_seconds):
            return False
        holder = await self.identity.get_principal(claim.user_id)  # type: ignore[arg-type]
        return holder is None or not holder.is_admin

    async def _take_over_claim(self, claim: AdminClaim, user_id: str) -> AdminClaim:
        new_version = claim.version + 1
        now = utc_now()
        result = await AdminClaim.find(
            AdminClaim.claim_key == BOOTSTRAP_CLAIM_KEY,
            AdminClaim.version == claim.version,
        ).update(
            Set(
                {
                    AdminClaim.user_id: user_id,
                    AdminClaim.claimed_at: now,
                    AdminClaim.version: new_version,
                }
            )
        )
        if not result or result.modified_count == 0:
            logger.info("claim_admin lost version race at v{} (caller={})", claim.version, user_id)
            raise _admin_exists()

        claim.user_id = user_id
        claim.claimed_at = now
        claim.version = new_version
        return claim

    async def _release_claim(self, claim: AdminClaim, user_id: str) -> None:
        """Free the claim so a later call can retry; only if we still hold it."""
        result = await AdminClaim.find(
            AdminClaim.claim_key == BOOTSTRAP_CLAIM_KEY,
            AdminClaim.user_id == user_id,
            AdminClaim.version == claim.version,
        ).update(Set({AdminClaim.user_id: None, AdminClaim.version: claim.version + 1}))
        logger.warning(
            "released bootstrap claim for user={} (modified={})",
            user_id,
            result.modified_count if result else 0,
        )

    # ==================== ROLES ====================

    async def set_admin(self, target_user_id: str, is_admin: bool) -> AdminStatus:
        """Set a user's admin flag. Caller must already be admin.

        No protection against removing the last admin.
        """
        updated = await self.identity.set_claim(target_user_id, ADMIN_CLAIM_KEY, is_admin)
        logger.info("set_admin user={} is_admin={}", target_user_id, is_admin)

        if not is_admin:
            await self._release_claim_if_held(target_user_id)

        await self._mirror_profile(updated.id, updated.email, is_admin)
        return AdminStatus(user_id=updated.id, is_admin=is_admin)

    async def _release_claim_if_held(self, user_id: str) -> None:
        claim = await AdminClaim.find_one(
            AdminClaim.claim_key == BOOTSTRAP_CLAIM_KEY,
            AdminClaim.user_id == user_id,
        )
        if claim is not None:
            await self._release_claim(claim, user_id)

    async def list_users(self) -> list[UserInfo]:
        principals = await self.identity.list_principals()
        for user in principals:
            await self._mirror_profile(user.id, user.email, user.is_admin)
        return [self._to_user_info(user) for user in principals]

    @staticmethod
    def _to_user_info(user: IdentityUser) -> UserInfo:
        return UserInfo(
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            last_sign_in_at=user.last_sign_in_at,
            is_admin=user.is_admin,
        )

    # ==================== PROFILE PROJECTION ====================

    async def _mirror_profile(self, user_id: str, email: str | None, is_admin: bool) -> None:
        """Best-effort copy of the admin flag into the local profile projection."""
        try:
            profile = await Profile.find_one(Profile.user_id == user_id)
            if profile is None:
                await Profile(user_id=user_id, email=email, is_admin=is_admin).insert()
                return
            if profile.is_admin == is_admin and (email is None or profile.email == email):
                return
            profile.is_admin = is_admin
            if email is not None:
                profile.email = email
            profile.updated_at = utc_now()
            await profile.save()
        except PyMongoError as e:
            logger.warning("profile mirror failed for user={}: {}", user_id, e)

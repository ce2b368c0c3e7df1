"""Identity provider client (GoTrue-style auth REST API).

Two credentials are used:
- the caller's access token, to verify who is calling;
- the service key, for privileged lookups and metadata writes.

Usage:
    from app.services.integrations.identity_service import get_identity_service

    identity = get_identity_service()
    token = await identity.verify_token(bearer)
    users = await identity.list_principals()
"""

from datetime import datetime
from functools import lru_cache
from typing import Any

import httpx
import jwt
from loguru import logger
from pydantic import BaseModel, Field

from app.app_config import get_app_environ_config
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode, upstream_error

ADMIN_CLAIM_KEY = "is_admin"


class IdentityUser(BaseModel):
    """A principal as returned by the provider's admin API."""

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    last_sign_in_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.user_metadata.get(ADMIN_CLAIM_KEY) is True


class VerifiedToken(BaseModel):
    """Result of verifying a bearer credential.

    `authoritative` is True when the claims came from the provider itself
    rather than from the signed token, which may carry stale metadata.
    """

    user_id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    issued_at: int | None = None
    authoritative: bool = False


class IdentityService:
    def __init__(
        self,
        base_url: str,
        anon_key: str | None = None,
        service_key: str | None = None,
        jwt_secret: str | None = None,
        jwt_audience: str | None = "authenticated",
        timeout: float = 10,
        page_size: int = 200,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.service_key = service_key
        self.jwt_secret = jwt_secret
        self.jwt_audience = jwt_audience
        self.timeout = httpx.Timeout(timeout)
        self.page_size = page_size
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    def _service_headers(self) -> dict[str, str]:
        if not self.service_key:
            raise AppError(
                AppErrorCode.E_INTERNAL_ERROR,
                "Identity service key is not configured",
                HttpStatusCode.INTERNAL_SERVER_ERROR,
            )
        return {"apikey": self.service_key, "Authorization": f"Bearer {self.service_key}"}

    # ==================== TOKENS ====================

    async def verify_token(self, token: str | None) -> VerifiedToken | None:
        """Resolve a bearer credential to its principal. Never raises; None means invalid."""
        if not token:
            return None

        if self.jwt_secret:
            return self._decode_token(token)

        headers = {"Authorization": f"Bearer {token}"}
        if self.anon_key:
            headers["apikey"] = self.anon_key

        try:
            async with self._client() as client:
                resp = await client.get("/auth/v1/user", headers=headers)
        except httpx.HTTPError as e:
            logger.warning("identity verify_token failed: {}: {}", type(e).__name__, e)
            return None

        if resp.status_code != 200:
            logger.debug("identity verify_token rejected status={}", resp.status_code)
            return None

        try:
            user = IdentityUser.model_validate(resp.json())
        except ValueError as e:
            logger.warning("identity verify_token unexpected body: {}", e)
            return None

        return VerifiedToken(
            user_id=user.id,
            email=user.email,
            user_metadata=user.user_metadata,
            authoritative=True,
        )

    def _decode_token(self, token: str) -> VerifiedToken | None:
        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=["HS256"],
                audience=self.jwt_audience,
                options={"verify_aud": bool(self.jwt_audience)},
            )
        except jwt.PyJWTError as e:
            logger.debug("local token verification failed: {}", e)
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        return VerifiedToken(
            user_id=user_id,
            email=payload.get("email"),
            user_metadata=payload.get("user_metadata") or {},
            issued_at=payload.get("iat"),
        )

    # ==================== ADMIN API ====================

    async def _admin_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.request(
                    method, path, params=params, json=json, headers=self._service_headers()
                )
        except httpx.TimeoutException as e:
            logger.warning("identity {} {} timed out: {}", method, path, e)
            raise upstream_error(f"Identity provider timed out: {e}", timeout=True) from e
        except httpx.HTTPError as e:
            logger.warning("identity {} {} failed: {}", method, path, e)
            raise upstream_error(f"Identity provider unavailable: {e}") from e

    @staticmethod
    def _raise_for_status(resp: httpx.Response, action: str) -> None:
        if resp.is_success:
            return
        detail = resp.text[:500]
        logger.warning("identity {} failed status={} body={}", action, resp.status_code, detail)
        raise upstream_error(f"Failed to {action}: {resp.status_code} {detail}")

    async def get_principal(self, user_id: str) -> IdentityUser | None:
        """Authoritative lookup by id. None when the provider does not know the user."""
        resp = await self._admin_request("GET", f"/auth/v1/admin/users/{user_id}")
        if resp.status_code == 404:
            return None
        self._raise_for_status(resp, "load user")
        return IdentityUser.model_validate(resp.json())

    async def list_principals(self) -> list[IdentityUser]:
        users: list[IdentityUser] = []
        page = 1
        while True:
            resp = await self._admin_request(
                "GET",
                "/auth/v1/admin/users",
                params={"page": page, "per_page": self.page_size},
            )
            self._raise_for_status(resp, "list users")

            body = resp.json()
            batch = body.get("users", []) if isinstance(body, dict) else body
            users.extend(IdentityUser.model_validate(item) for item in batch)

            if len(batch) < self.page_size:
                break
            page += 1

        logger.debug("identity list_principals count={} pages={}", len(users), page)
        return users

    async def find_principal_by_email(self, email: str) -> IdentityUser | None:
        target = email.strip().lower()
        for user in await self.list_principals():
            if user.email and user.email.lower() == target:
                return user
        return None

    async def set_claim(self, user_id: str, key: str, value: Any) -> IdentityUser:
        """Merge `key: value` into the user's metadata, keeping the other keys."""
        current = await self.get_principal(user_id)
        if current is None:
            raise AppError(
                AppErrorCode.E_USER_NOT_FOUND,
                f"User not found: {user_id}",
                HttpStatusCode.NOT_FOUND,
            )

        metadata = {**current.user_metadata, key: value}
        resp = await self._admin_request(
            "PUT",
            f"/auth/v1/admin/users/{user_id}",
            json={"user_metadata": metadata},
        )
        self._raise_for_status(resp, "update user")

        logger.info("identity set_claim user={} {}={}", user_id, key, value)
        return IdentityUser.model_validate(resp.json())


@lru_cache
def get_identity_service() -> IdentityService:
    cfg = get_app_environ_config()
    return IdentityService(
        base_url=cfg.IDENTITY_URL,
        anon_key=cfg.IDENTITY_ANON_KEY,
        service_key=cfg.IDENTITY_SERVICE_KEY,
        jwt_secret=cfg.IDENTITY_JWT_SECRET,
        jwt_audience=cfg.IDENTITY_JWT_AUDIENCE,
        timeout=cfg.IDENTITY_TIMEOUT_SECONDS,
        page_size=cfg.IDENTITY_PAGE_SIZE,
    )

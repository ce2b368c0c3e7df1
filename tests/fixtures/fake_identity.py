"""In-memory stand-in for IdentityService."""

from typing import Any

from app.services.integrations.identity_service import IdentityUser, VerifiedToken
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode, upstream_error


class FakeIdentity:
    def __init__(self, users: list[IdentityUser] | None = None) -> None:
        self.users: dict[str, IdentityUser] = {u.id: u for u in users or []}
        # token -> verification result
        self.tokens: dict[str, VerifiedToken] = {}
        self.fail_set_claim = False
        self.lookups = 0

    def add_user(self, user_id: str, email: str | None = None, **metadata: Any) -> IdentityUser:
        user = IdentityUser(
            id=user_id, email=email or f"{user_id}@test.dev", user_metadata=metadata
        )
        self.users[user_id] = user
        return user

    async def verify_token(self, token: str | None) -> VerifiedToken | None:
        return self.tokens.get(token or "")

    async def get_principal(self, user_id: str) -> IdentityUser | None:
        self.lookups += 1
        return self.users.get(user_id)

    async def list_principals(self) -> list[IdentityUser]:
        return list(self.users.values())

    async def find_principal_by_email(self, email: str) -> IdentityUser | None:
        for user in self.users.values():
            if user.email and user.email.lower() == email.lower():
                return user
        return None

    async def set_claim(self, user_id: str, key: str, value: Any) -> IdentityUser:
        if self.fail_set_claim:
            raise upstream_error("provider down")
        user = self.users.get(user_id)
        if user is None:
            raise AppError(AppErrorCode.E_USER_NOT_FOUND, "User not found", HttpStatusCode.NOT_FOUND)
        user.user_metadata = {**user.user_metadata, key: value}
        return user

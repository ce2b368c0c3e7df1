"""Authenticated principal resolved from a bearer credential."""

import time
from typing import Any

from pydantic import BaseModel, Field

from app.services.integrations.identity_service import ADMIN_CLAIM_KEY, VerifiedToken


class Principal(BaseModel):
    user_id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    issued_at: int | None = None
    # Claims were read from the provider, not from the signed token
    authoritative: bool = False

    @classmethod
    def from_token(cls, token: VerifiedToken) -> "Principal":
        return cls(**token.model_dump())

    @property
    def admin_claim(self) -> bool:
        return self.user_metadata.get(ADMIN_CLAIM_KEY) is True

    def has_fresh_admin_claim(self, max_age_seconds: int, now: float | None = None) -> bool:
        """True only for an is_admin=True claim that can be trusted without a lookup."""
        if not self.admin_claim:
            return False
        if self.authoritative:
            return True
        if self.issued_at is None:
            return False
        now = time.time() if now is None else now
        return now - self.issued_at <= max_age_seconds

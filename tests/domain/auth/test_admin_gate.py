"""Tests for admin authorization decisions."""

import time

import pytest

from app.domain.auth.admin_gate import AdminGate
from app.domain.auth.principal import Principal
from app.services.integrations.identity_service import VerifiedToken
from app.utils.app_errors import AppError, AppErrorCode
from tests.fixtures.fake_identity import FakeIdentity

MAX_AGE = 300


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity()


@pytest.fixture
def gate(identity: FakeIdentity) -> AdminGate:
    return AdminGate(identity, claim_max_age_seconds=MAX_AGE)  # type: ignore[arg-type]


def local_token(user_id: str, is_admin: bool | None, age: int = 0) -> VerifiedToken:
    metadata = {} if is_admin is None else {"is_admin": is_admin}
    return VerifiedToken(
        user_id=user_id, user_metadata=metadata, issued_at=int(time.time()) - age
    )


class TestPrincipal:
    def test_only_literal_true_counts(self):
        assert Principal(user_id="u", user_metadata={"is_admin": True}).admin_claim
        assert not Principal(user_id="u", user_metadata={"is_admin": "true"}).admin_claim
        assert not Principal(user_id="u", user_metadata={"is_admin": 1}).admin_claim
        assert not Principal(user_id="u").admin_claim

    def test_freshness(self):
        p = Principal(user_id="u", user_metadata={"is_admin": True}, issued_at=1000)
        assert p.has_fresh_admin_claim(300, now=1200)
        assert not p.has_fresh_admin_claim(300, now=1301)

    def test_no_issued_at_is_never_fresh(self):
        p = Principal(user_id="u", user_metadata={"is_admin": True})
        assert not p.has_fresh_admin_claim(300, now=0)


class TestRequireAdmin:
    async def test_missing_token_is_unauthorized(self, gate: AdminGate):
        with pytest.raises(AppError) as exc_info:
            await gate.require_admin(None)
        assert exc_info.value.errcode == AppErrorCode.E_BAD_TOKEN
        assert exc_info.value.status_code == 401

    async def test_invalid_token_is_unauthorized(self, gate: AdminGate):
        with pytest.raises(AppError) as exc_info:
            await gate.require_admin("garbage")
        assert exc_info.value.status_code == 401

    async def test_fresh_claim_skips_lookup(self, gate: AdminGate, identity: FakeIdentity):
        identity.tokens["t"] = local_token("u1", True)

        principal = await gate.require_admin("t")

        assert principal.user_id == "u1"
        assert identity.lookups == 0

    async def test_stale_claim_is_rechecked(self, gate: AdminGate, identity: FakeIdentity):
        identity.tokens["t"] = local_token("u1", True, age=MAX_AGE + 60)
        identity.add_user("u1", is_admin=False)

        with pytest.raises(AppError) as exc_info:
            await gate.require_admin("t")

        assert exc_info.value.errcode == AppErrorCode.E_ADMIN_REQUIRED
        assert exc_info.value.status_code == 403
        assert identity.lookups == 1

    async def test_missing_claim_uses_authoritative_lookup(
        self, gate: AdminGate, identity: FakeIdentity
    ):
        # Granted after the token was issued
        identity.tokens["t"] = local_token("u1", None)
        identity.add_user("u1", is_admin=True)

        principal = await gate.require_admin("t")

        assert principal.user_id == "u1"
        assert identity.lookups == 1

    async def test_false_claim_denied(self, gate: AdminGate, identity: FakeIdentity):
        identity.tokens["t"] = local_token("u1", False)
        identity.add_user("u1", is_admin=False)

        with pytest.raises(AppError) as exc_info:
            await gate.require_admin("t")
        assert exc_info.value.errcode == AppErrorCode.E_ADMIN_REQUIRED

    async def test_authoritative_token_trusted_without_lookup(
        self, gate: AdminGate, identity: FakeIdentity
    ):
        identity.tokens["t"] = VerifiedToken(
            user_id="u1", user_metadata={"is_admin": False}, authoritative=True
        )

        with pytest.raises(AppError):
            await gate.require_admin("t")
        assert identity.lookups == 0


class TestCheckAdmin:
    async def test_never_raises(self, gate: AdminGate, identity: FakeIdentity):
        assert await gate.check_admin(None) is False
        assert await gate.check_admin("garbage") is False

    async def test_true_for_admin(self, gate: AdminGate, identity: FakeIdentity):
        identity.tokens["t"] = local_token("u1", True)
        assert await gate.check_admin("t") is True

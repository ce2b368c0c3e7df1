"""Helpers for router tests: a real AdminGate over FakeIdentity, and sample payloads."""

from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from app.api.v1.dependency import get_admin_gate
from app.api.v1.errors import app_error_handler
from app.domain.auth.admin_gate import AdminGate
from app.domain.catalog.session.session_models import SessionResponse
from app.schemas.session import Difficulty
from app.services.integrations.identity_service import VerifiedToken
from app.utils.app_errors import AppError

from tests.fixtures.fake_identity import FakeIdentity

USER_HEADERS = {"Authorization": "Bearer user-token"}
ADMIN_HEADERS = {"Authorization": "Bearer admin-token"}

NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def identity() -> FakeIdentity:
    fake = FakeIdentity()
    fake.add_user("user_1")
    fake.add_user("admin_1", is_admin=True)
    fake.tokens["user-token"] = VerifiedToken(
        user_id="user_1", email="user_1@test.dev", authoritative=True
    )
    fake.tokens["admin-token"] = VerifiedToken(
        user_id="admin_1",
        email="admin_1@test.dev",
        user_metadata={"is_admin": True},
        authoritative=True,
    )
    return fake


@pytest.fixture
def admin_gate(identity: FakeIdentity) -> AdminGate:
    return AdminGate(identity, claim_max_age_seconds=300)  # type: ignore[arg-type]


def _provide(value: Any) -> Callable[[], Any]:
    return lambda: value


def make_client(
    gate: AdminGate, router: APIRouter, overrides: dict[Callable, Any] | None = None
) -> TestClient:
    """Mount one router the way the API does, with auth resolved by `gate`."""
    app = FastAPI()
    app.dependency_overrides[get_admin_gate] = lambda: gate
    for dependency, value in (overrides or {}).items():
        app.dependency_overrides[dependency] = _provide(value)
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.include_router(router)
    return TestClient(app)


def session_response(**overrides: Any) -> SessionResponse:
    fields: dict[str, Any] = {
        "session_id": "se_test",
        "slug": "morning-flow-ab12cd",
        "title": "Morning Flow",
        "duration": 45,
        "difficulty": Difficulty.BEGINNER,
        "is_published": True,
        "is_live": False,
        "streaming_now": False,
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return SessionResponse(**fields)

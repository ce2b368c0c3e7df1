"""Unit tests for the public session endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.api.v1.routers.session import get_session_service, router
from app.domain.auth.admin_gate import AdminGate
from app.domain.catalog.session.session_domain import SessionService
from app.domain.catalog.session.session_models import (
    LiveScheduleResponse,
    VideoListParams,
    VideoListResponse,
)
from app.schemas.session import Difficulty
from app.utils.app_errors import AppErrorCode, not_found
from tests.fixtures.api import NOW, make_client, session_response


@pytest.fixture
def mock_session_service() -> AsyncMock:
    return AsyncMock(spec=SessionService)


@pytest.fixture
def client(admin_gate: AdminGate, mock_session_service: AsyncMock) -> TestClient:
    return make_client(admin_gate, router, {get_session_service: mock_session_service})


class TestListVideos:
    def test_defaults(self, client: TestClient, mock_session_service: AsyncMock):
        mock_session_service.list_videos.return_value = VideoListResponse(
            sessions=[session_response()], total=1, has_more=False
        )

        response = client.get("/session/list_videos")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["results"]["total"] == 1
        assert data["results"]["sessions"][0]["slug"] == "morning-flow-ab12cd"
        assert data["results"]["sessions"][0]["created_at"] == "2025-06-01T09:00:00+00:00"
        mock_session_service.list_videos.assert_called_once_with(VideoListParams())

    def test_filters_are_passed_through(
        self, client: TestClient, mock_session_service: AsyncMock
    ):
        mock_session_service.list_videos.return_value = VideoListResponse(
            sessions=[], total=0, has_more=False
        )

        response = client.get(
            "/session/list_videos",
            params={
                "category_id": "cat_1",
                "difficulty": "advanced",
                "order": "oldest",
                "limit": 5,
                "offset": 10,
            },
        )

        assert response.status_code == 200
        mock_session_service.list_videos.assert_called_once_with(
            VideoListParams(
                category_id="cat_1",
                difficulty=Difficulty.ADVANCED,
                order="oldest",
                limit=5,
                offset=10,
            )
        )

    @pytest.mark.parametrize(
        "params",
        [{"order": "random"}, {"limit": 0}, {"limit": 101}, {"offset": -1}],
    )
    def test_rejects_bad_query(
        self, client: TestClient, mock_session_service: AsyncMock, params: dict
    ):
        response = client.get("/session/list_videos", params=params)

        assert response.status_code == 422
        mock_session_service.list_videos.assert_not_called()


class TestGetSession:
    def test_found(self, client: TestClient, mock_session_service: AsyncMock):
        mock_session_service.get_session.return_value = session_response(session_id="se_1")

        response = client.get("/session/get_session", params={"session_id": "se_1"})

        assert response.status_code == 200
        assert response.json()["results"]["session_id"] == "se_1"
        mock_session_service.get_session.assert_called_once_with("se_1")

    def test_not_found(self, client: TestClient, mock_session_service: AsyncMock):
        mock_session_service.get_session.side_effect = not_found(
            AppErrorCode.E_SESSION_NOT_FOUND, "Session not found: se_x"
        )

        response = client.get("/session/get_session", params={"session_id": "se_x"})

        assert response.status_code == 404
        data = response.json()
        assert data["success"] is False
        assert data["errcode"] == "E_SESSION_NOT_FOUND"
        assert data["erresid"]


class TestLiveEndpoints:
    def test_live_schedule(self, client: TestClient, mock_session_service: AsyncMock):
        mock_session_service.live_schedule.return_value = LiveScheduleResponse(
            upcoming=[session_response(session_id="se_up", is_live=True, live_at=NOW)],
            past=[],
        )

        response = client.get("/session/live_schedule")

        assert response.status_code == 200
        results = response.json()["results"]
        assert [s["session_id"] for s in results["upcoming"]] == ["se_up"]
        assert results["upcoming"][0]["live_at"] == "2025-06-01T09:00:00+00:00"
        assert results["past"] == []

    def test_streaming_now_empty(self, client: TestClient, mock_session_service: AsyncMock):
        mock_session_service.streaming_now.return_value = None

        response = client.get("/session/streaming_now")

        assert response.status_code == 200
        assert response.json()["results"] == {"session": None}

    def test_streaming_now(self, client: TestClient, mock_session_service: AsyncMock):
        mock_session_service.streaming_now.return_value = session_response(
            is_live=True, live_at=NOW, streaming_now=True
        )

        response = client.get("/session/streaming_now")

        assert response.json()["results"]["session"]["streaming_now"] is True

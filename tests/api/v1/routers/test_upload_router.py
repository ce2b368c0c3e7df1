"""Unit tests for media upload endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.api.v1.routers.upload import get_upload_service, router
from app.domain.auth.admin_gate import AdminGate
from app.domain.media.upload_domain import UploadService
from app.domain.media.upload_models import DeleteFolderResult, MediaKind, UploadResult
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode, invalid_request
from tests.fixtures.api import ADMIN_HEADERS, USER_HEADERS, make_client


@pytest.fixture
def mock_upload_service() -> AsyncMock:
    return AsyncMock(spec=UploadService)


@pytest.fixture
def client(admin_gate: AdminGate, mock_upload_service: AsyncMock) -> TestClient:
    return make_client(admin_gate, router, {get_upload_service: mock_upload_service})


class TestUploadThumbnail:
    def test_success(self, client: TestClient, mock_upload_service: AsyncMock):
        mock_upload_service.upload.return_value = UploadResult(
            bucket="thumbnails",
            key="morning-flow/thumbnail-1.png",
            url="https://media.test/thumbnails/morning-flow/thumbnail-1.png",
            content_type="image/png",
            size=4,
        )

        response = client.post(
            "/upload/upload_thumbnail",
            files={"file": ("cover.png", b"\x89PNG", "image/png")},
            data={"slug": "morning-flow"},
            headers=ADMIN_HEADERS,
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert results == {
            "url": "https://media.test/thumbnails/morning-flow/thumbnail-1.png",
            "key": "morning-flow/thumbnail-1.png",
            "content_type": "image/png",
            "size": 4,
        }
        args = mock_upload_service.upload.call_args.args
        assert args[0] == MediaKind.THUMBNAIL
        assert args[1] == "morning-flow"
        assert args[3] == "image/png"

    def test_missing_file(self, client: TestClient, mock_upload_service: AsyncMock):
        mock_upload_service.upload.side_effect = invalid_request("No file provided")

        response = client.post(
            "/upload/upload_thumbnail", data={"slug": "morning-flow"}, headers=ADMIN_HEADERS
        )

        assert response.status_code == 400
        assert response.json()["errcode"] == "E_INVALID_REQUEST"
        args = mock_upload_service.upload.call_args.args
        assert args[2] is None
        assert args[3] is None

    def test_admin_only(self, client: TestClient, mock_upload_service: AsyncMock):
        response = client.post(
            "/upload/upload_thumbnail",
            files={"file": ("cover.png", b"\x89PNG", "image/png")},
            headers=USER_HEADERS,
        )

        assert response.status_code == 403
        mock_upload_service.upload.assert_not_called()


class TestUploadVideo:
    def test_store_failure(self, client: TestClient, mock_upload_service: AsyncMock):
        mock_upload_service.upload.side_effect = AppError(
            AppErrorCode.E_UPSTREAM_ERROR, "store unavailable", HttpStatusCode.BAD_GATEWAY
        )

        response = client.post(
            "/upload/upload_video",
            files={"file": ("class.mp4", b"\x00\x00\x00\x18ftyp", "video/mp4")},
            data={"slug": "morning-flow"},
            headers=ADMIN_HEADERS,
        )

        assert response.status_code == 502
        assert response.json()["errcode"] == "E_UPSTREAM_ERROR"
        assert mock_upload_service.upload.call_args.args[0] == MediaKind.VIDEO


class TestDeleteFolder:
    def test_delete(self, client: TestClient, mock_upload_service: AsyncMock):
        mock_upload_service.delete_folder.return_value = DeleteFolderResult(
            slug="morning-flow", videos_deleted=2, thumbnails_deleted=1
        )

        response = client.post(
            "/upload/delete_folder", json={"slug": "morning-flow"}, headers=ADMIN_HEADERS
        )

        assert response.status_code == 200
        assert response.json()["results"]["videos_deleted"] == 2
        mock_upload_service.delete_folder.assert_called_once_with("morning-flow")

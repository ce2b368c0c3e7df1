"""Tests for upload validation and folder deletion."""

import io

import pytest

from app.domain.media.upload_domain import UploadService
from app.domain.media.upload_models import MediaKind
from app.utils.app_errors import AppError, AppErrorCode
from tests.fixtures.fake_s3 import FakeS3
from tests.fixtures.services import THUMBNAILS, VIDEOS


def image(size: int = 1024) -> io.BytesIO:
    return io.BytesIO(b"\xff" * size)


class TestValidate:
    def test_missing_file(self, upload_service: UploadService):
        with pytest.raises(AppError, match="No file provided"):
            upload_service.validate(MediaKind.THUMBNAIL, "slug", None, "image/png")

    def test_missing_slug(self, upload_service: UploadService):
        with pytest.raises(AppError, match="No slug provided"):
            upload_service.validate(MediaKind.THUMBNAIL, "  ", image(), "image/png")

    @pytest.mark.parametrize("slug", ["../etc", "a/b", ".hidden", "with space"])
    def test_unsafe_slug(self, upload_service: UploadService, slug: str):
        with pytest.raises(AppError, match="Invalid slug"):
            upload_service.validate(MediaKind.THUMBNAIL, slug, image(), "image/png")

    def test_wrong_type_for_thumbnail(self, upload_service: UploadService):
        with pytest.raises(AppError) as exc_info:
            upload_service.validate(MediaKind.THUMBNAIL, "slug", image(), "image/gif")
        assert exc_info.value.errcode == AppErrorCode.E_INVALID_REQUEST
        assert "Invalid file type" in exc_info.value.errmesg

    def test_video_type_rejected_for_thumbnail(self, upload_service: UploadService):
        with pytest.raises(AppError, match="Invalid file type"):
            upload_service.validate(MediaKind.THUMBNAIL, "slug", image(), "video/mp4")

    def test_thumbnail_too_large(self, upload_service: UploadService):
        with pytest.raises(AppError, match="File too large. Max 5MB"):
            upload_service.validate(
                MediaKind.THUMBNAIL, "slug", image(5 * 1024 * 1024 + 1), "image/jpeg"
            )

    def test_exact_ceiling_accepted(self, upload_service: UploadService):
        slug, content_type, size = upload_service.validate(
            MediaKind.THUMBNAIL, "slug", image(5 * 1024 * 1024), "IMAGE/JPEG; charset=binary"
        )
        assert (slug, content_type, size) == ("slug", "image/jpeg", 5 * 1024 * 1024)

    def test_type_checked_before_size(self, upload_service: UploadService):
        with pytest.raises(AppError, match="Invalid file type"):
            upload_service.validate(
                MediaKind.THUMBNAIL, "slug", image(6 * 1024 * 1024), "text/plain"
            )


class TestUpload:
    async def test_thumbnail_stored_under_slug_folder(
        self, upload_service: UploadService, fake_s3: FakeS3
    ):
        result = await upload_service.upload(
            MediaKind.THUMBNAIL, "morning-flow-1", image(10), "image/png"
        )

        assert result.key == "morning-flow-1/thumbnail.png"
        assert result.bucket == THUMBNAILS
        assert result.url == f"https://media.test/{THUMBNAILS}/morning-flow-1/thumbnail.png"
        assert result.size == 10
        assert (THUMBNAILS, "morning-flow-1/thumbnail.png") in fake_s3.objects

    async def test_video_extension_from_type(self, upload_service: UploadService, fake_s3: FakeS3):
        result = await upload_service.upload(
            MediaKind.VIDEO, "class-1", io.BytesIO(b"movie"), "video/quicktime"
        )

        assert result.key == "class-1/video.mov"
        assert fake_s3.objects[(VIDEOS, "class-1/video.mov")] == b"movie"

    async def test_invalid_upload_sends_nothing(
        self, upload_service: UploadService, fake_s3: FakeS3
    ):
        with pytest.raises(AppError):
            await upload_service.upload(MediaKind.VIDEO, "class-1", image(), "image/png")
        assert fake_s3.objects == {}


class TestDeleteFolder:
    async def test_empty_slug(self, upload_service: UploadService, fake_s3: FakeS3):
        with pytest.raises(AppError, match="No slug provided"):
            await upload_service.delete_folder("")
        assert fake_s3.delete_calls == []

    async def test_short_slug(self, upload_service: UploadService, fake_s3: FakeS3):
        with pytest.raises(AppError, match="Invalid slug - too short"):
            await upload_service.delete_folder("ab")
        assert fake_s3.delete_calls == []

    async def test_deletes_only_exact_folder_in_both_buckets(
        self, upload_service: UploadService, fake_s3: FakeS3
    ):
        fake_s3.objects = {
            (VIDEOS, "test/video.mp4"): b"",
            (THUMBNAILS, "test/thumbnail.jpg"): b"",
            (VIDEOS, "test-video/video.mp4"): b"",
        }

        result = await upload_service.delete_folder("test")

        assert result.videos_deleted == 1
        assert result.thumbnails_deleted == 1
        assert list(fake_s3.objects) == [(VIDEOS, "test-video/video.mp4")]
        assert fake_s3.delete_calls == [(VIDEOS, "test/"), (THUMBNAILS, "test/")]

    async def test_missing_folder_is_not_an_error(self, upload_service: UploadService):
        result = await upload_service.delete_folder("nothing-here")
        assert result.videos_deleted == 0
        assert result.thumbnails_deleted == 0

"""Tests for the media cleanup cron task."""

from unittest.mock import patch

import pytest

from app.domain.media._cleanup import MediaCleanupService
from app.schemas import MediaCleanupTask
from tests.fixtures.fake_s3 import FakeS3
from tests.fixtures.services import THUMBNAILS, VIDEOS


@pytest.mark.usefixtures("clear_collections")
class TestRetryMediaCleanup:
    async def test_pass_cleans_pending_folders(
        self, beanie_db, cleanup_service: MediaCleanupService, fake_s3: FakeS3
    ):
        from app.workers.media_cleanup_worker import run_cleanup_pass

        fake_s3.objects[(VIDEOS, "flow-1/video.mp4")] = b""
        fake_s3.objects[(THUMBNAILS, "flow-1/thumbnail.png")] = b""
        await cleanup_service.create_task("flow-1", "se_1")

        with patch(
            "app.workers.media_cleanup_worker.get_media_cleanup_service",
            return_value=cleanup_service,
        ):
            result = await run_cleanup_pass()

        assert result == {"processed": 1, "cleaned": 1, "failed": 0}
        assert fake_s3.objects == {}
        assert await MediaCleanupTask.count() == 0

    async def test_pass_reports_failures(
        self, beanie_db, cleanup_service: MediaCleanupService, fake_s3: FakeS3
    ):
        from app.workers.media_cleanup_worker import run_cleanup_pass

        fake_s3.fail_upstream()
        await cleanup_service.create_task("flow-1")

        with patch(
            "app.workers.media_cleanup_worker.get_media_cleanup_service",
            return_value=cleanup_service,
        ):
            result = await run_cleanup_pass()

        assert result == {"processed": 1, "cleaned": 0, "failed": 1}
        assert await MediaCleanupTask.count() == 1

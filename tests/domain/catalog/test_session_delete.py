"""Tests for session deletion and its media cleanup."""

from datetime import UTC, datetime

import pytest

from app.domain.catalog.session.session_domain import SessionService
from app.schemas import (
    CleanupStatus,
    Favorite,
    LiveState,
    MediaCleanupTask,
    Session,
    WatchHistory,
)
from app.utils.app_errors import AppError, AppErrorCode
from tests.fixtures.fake_s3 import FakeS3
from tests.fixtures.services import THUMBNAILS, VIDEOS


async def insert_with_media(fake_s3: FakeS3, slug: str = "flow-1700000000000") -> Session:
    session = Session(
        session_id="se_del",
        slug=slug,
        title="Flow",
        is_live=True,
        live_at=datetime(2025, 6, 1, 9, 0, tzinfo=UTC),
    )
    await session.insert()
    fake_s3.objects[(VIDEOS, f"{slug}/video.mp4")] = b"v"
    fake_s3.objects[(THUMBNAILS, f"{slug}/thumbnail.jpg")] = b"t"
    # A neighbour whose slug shares the prefix must survive
    fake_s3.objects[(VIDEOS, f"{slug}-2/video.mp4")] = b"other"
    return session


@pytest.mark.usefixtures("clear_collections")
class TestDeleteSession:
    async def test_delete_removes_row_links_and_media(
        self, beanie_db, session_service: SessionService, fake_s3: FakeS3
    ):
        session = await insert_with_media(fake_s3)
        await Favorite(user_id="u1", session_id="se_del").insert()
        await WatchHistory(user_id="u1", session_id="se_del", progress=30).insert()
        await session_service.go_live("se_del")

        result = await session_service.delete_session("se_del")

        assert result.media_cleaned is True
        assert result.cleanup_task_id is None
        assert await Session.find_one(Session.session_id == "se_del") is None
        assert await Favorite.count() == 0
        assert await WatchHistory.count() == 0
        assert await MediaCleanupTask.count() == 0
        state = await LiveState.find_one()
        assert state is not None and state.session_id is None
        assert list(fake_s3.objects) == [(VIDEOS, f"{session.slug}-2/video.mp4")]

    async def test_media_failure_keeps_pending_task(
        self, beanie_db, session_service: SessionService, fake_s3: FakeS3
    ):
        await insert_with_media(fake_s3)
        fake_s3.fail_upstream()

        result = await session_service.delete_session("se_del")

        assert result.media_cleaned is False
        assert result.cleanup_task_id is not None
        assert await Session.count() == 0

        task = await MediaCleanupTask.find_one(MediaCleanupTask.task_id == result.cleanup_task_id)
        assert task is not None
        assert task.status == CleanupStatus.PENDING
        assert task.attempts == 1
        assert task.last_error == "store unavailable"

    async def test_delete_missing_session(self, beanie_db, session_service: SessionService):
        with pytest.raises(AppError) as exc_info:
            await session_service.delete_session("se_missing")
        assert exc_info.value.errcode == AppErrorCode.E_SESSION_NOT_FOUND
        assert await MediaCleanupTask.count() == 0

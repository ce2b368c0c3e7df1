"""Session domain service: publication rules, listings and the streaming toggle."""

from datetime import datetime

from loguru import logger

from app.schemas import Favorite, WatchHistory
from app.shared.api.utils import run_taskgroup

from ...media._cleanup import MediaCleanupService
from ..taxonomy.taxonomy_domain import TaxonomyService
from ._listing import split_videos_and_live
from ._sessions import SessionOperations
from ._streaming import StreamingOperations
from .session_models import (
    AdminSessionItem,
    AdminSessionListResponse,
    DeleteSessionResponse,
    LiveScheduleResponse,
    SessionResponse,
    SessionSaveParams,
    VideoListParams,
    VideoListResponse,
)


class SessionService:
    def __init__(
        self,
        cleanup: MediaCleanupService,
        taxonomy: TaxonomyService | None = None,
        live_state_max_retries: int = 3,
    ):
        self._sessions = SessionOperations()
        self._streaming = StreamingOperations(self._sessions, max_retries=live_state_max_retries)
        self._cleanup = cleanup
        self._taxonomy = taxonomy or TaxonomyService()

    # ==================== PUBLIC ====================

    async def list_videos(self, params: VideoListParams) -> VideoListResponse:
        return await self._sessions.list_videos(params)

    async def live_schedule(self, now: datetime | None = None) -> LiveScheduleResponse:
        return await self._sessions.live_schedule(now)

    async def get_session(self, session_id: str) -> SessionResponse:
        """Published sessions only. Raises AppError if absent or draft."""
        return await self._sessions.get_published(session_id)

    async def streaming_now(self) -> SessionResponse | None:
        return await self._streaming.current()

    # ==================== ADMIN ====================

    async def admin_list(self) -> AdminSessionListResponse:
        sessions, categories, themes = await run_taskgroup(
            self._sessions.list_all(),
            self._taxonomy.list_categories(),
            self._taxonomy.list_themes(),
        )

        category_names = {c.category_id: c.name for c in categories}
        theme_names = {t.theme_id: t.name for t in themes}

        def to_item(session) -> AdminSessionItem:
            return AdminSessionItem(
                **session.model_dump(exclude={"id", "revision_id"}),
                category_name=category_names.get(session.category_id),
                theme_name=theme_names.get(session.theme_id),
            )

        videos, live = split_videos_and_live(sessions)
        return AdminSessionListResponse(
            videos=[to_item(s) for s in videos],
            live=[to_item(s) for s in live],
            categories=categories,
            themes=themes,
        )

    async def create_session(self, params: SessionSaveParams) -> SessionResponse:
        return await self._sessions.create_session(params)

    async def update_session(self, session_id: str, params: SessionSaveParams) -> SessionResponse:
        result = await self._sessions.update_session(session_id, params)
        # A session turned into a video stops streaming
        if result.live_at is None:
            await self._streaming.clear_pointer(session_id)
        return result

    async def set_published(self, session_id: str, is_published: bool) -> SessionResponse:
        return await self._sessions.set_published(session_id, is_published)

    async def go_live(self, session_id: str) -> SessionResponse:
        return await self._streaming.go_live(session_id)

    async def end_stream(self, session_id: str) -> SessionResponse:
        return await self._streaming.end_stream(session_id)

    async def delete_session(self, session_id: str) -> DeleteSessionResponse:
        """Delete the row, its favorites and history, then its media.

        The cleanup record is written first so a failed media delete is retried
        by the worker instead of leaking storage.
        """
        session = await self._sessions.get_session_doc(session_id)
        task = await self._cleanup.create_task(session.slug, session_id)

        await session.delete()
        await Favorite.find(Favorite.session_id == session_id).delete()
        await WatchHistory.find(WatchHistory.session_id == session_id).delete()
        await self._streaming.clear_pointer(session_id)
        logger.info("Deleted session {} slug={}", session_id, session.slug)

        cleaned = await self._cleanup.run_task(task)
        return DeleteSessionResponse(
            session_id=session_id,
            slug=session.slug,
            media_cleaned=cleaned,
            cleanup_task_id=None if cleaned else task.task_id,
        )

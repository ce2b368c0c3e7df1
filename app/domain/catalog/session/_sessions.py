"""Session create/update/read operations."""

from datetime import datetime

from loguru import logger
from pymongo.errors import DuplicateKeyError

from app.schemas import Category, Session, Theme
from app.schemas.schema_utils import utc_now
from app.utils.app_errors import AppErrorCode, invalid_request, not_found

from ...utils.idgen import new_session_id
from ...utils.slug import unique_slug
from ._listing import partition_live
from .session_models import (
    LiveScheduleResponse,
    SessionResponse,
    SessionSaveParams,
    VideoListParams,
    VideoListResponse,
)

SLUG_INSERT_ATTEMPTS = 3


def to_response(session: Session) -> SessionResponse:
    return SessionResponse(**session.model_dump(exclude={"id", "revision_id"}))


class SessionOperations:
    """Session-related operations."""

    async def get_session_doc(self, session_id: str) -> Session:
        session = await Session.find_one(Session.session_id == session_id)
        if session is None:
            raise not_found(AppErrorCode.E_SESSION_NOT_FOUND, f"Session not found: {session_id}")
        return session

    async def _validate(self, params: SessionSaveParams) -> dict:
        """Check the form and return normalized field values. Nothing is written."""
        title = params.title.strip()
        if not title:
            raise invalid_request("Title is required")
        if params.duration <= 0:
            raise invalid_request("Duration must be a positive number of minutes")

        if params.category_id and not await Category.find_one(
            Category.category_id == params.category_id
        ):
            raise not_found(
                AppErrorCode.E_CATEGORY_NOT_FOUND, f"Category not found: {params.category_id}"
            )
        if params.theme_id and not await Theme.find_one(Theme.theme_id == params.theme_id):
            raise not_found(AppErrorCode.E_THEME_NOT_FOUND, f"Theme not found: {params.theme_id}")

        fields = params.model_dump()
        fields["title"] = title
        if params.is_live:
            if params.live_at is None:
                raise invalid_request("live_at is required for a live session")
            fields["video_url"] = None
        else:
            fields["live_at"] = None
        return fields

    async def create_session(self, params: SessionSaveParams) -> SessionResponse:
        fields = await self._validate(params)

        for attempt in range(1, SLUG_INSERT_ATTEMPTS + 1):
            now = utc_now()
            session = Session(
                session_id=new_session_id(),
                slug=unique_slug(fields["title"]),
                created_at=now,
                updated_at=now,
                **fields,
            )
            try:
                await session.insert()
            except DuplicateKeyError:
                logger.warning("slug collision on {} (attempt {})", session.slug, attempt)
                continue
            logger.info("Created session {} slug={}", session.session_id, session.slug)
            return to_response(session)

        raise invalid_request("Could not allocate a unique slug, try again")

    async def update_session(self, session_id: str, params: SessionSaveParams) -> SessionResponse:
        """Update every editable field. The slug never changes."""
        session = await self.get_session_doc(session_id)
        fields = await self._validate(params)

        for field, value in fields.items():
            setattr(session, field, value)
        if session.live_at is None:
            session.streaming_now = False
        session.updated_at = utc_now()
        await session.save()

        logger.info("Updated session {}", session_id)
        return to_response(session)

    async def set_published(self, session_id: str, is_published: bool) -> SessionResponse:
        session = await self.get_session_doc(session_id)
        if session.is_published != is_published:
            session.is_published = is_published
            session.updated_at = utc_now()
            await session.save()
        return to_response(session)

    # ==================== PUBLIC READS ====================

    async def get_published(self, session_id: str) -> SessionResponse:
        session = await Session.find_one(
            Session.session_id == session_id,
            Session.is_published == True,  # noqa: E712
        )
        if session is None:
            raise not_found(AppErrorCode.E_SESSION_NOT_FOUND, f"Session not found: {session_id}")
        return to_response(session)

    async def list_videos(self, params: VideoListParams) -> VideoListResponse:
        filters = [
            Session.is_published == True,  # noqa: E712
            Session.live_at == None,  # noqa: E711
        ]
        if params.category_id:
            filters.append(Session.category_id == params.category_id)
        if params.theme_id:
            filters.append(Session.theme_id == params.theme_id)
        if params.difficulty:
            filters.append(Session.difficulty == params.difficulty)

        sign = "+" if params.order == "oldest" else "-"
        total = await Session.find(*filters).count()
        sessions = (
            await Session.find(*filters)
            .sort(f"{sign}created_at", f"{sign}session_id")
            .skip(params.offset)
            .limit(params.limit)
            .to_list()
        )

        return VideoListResponse(
            sessions=[to_response(s) for s in sessions],
            total=total,
            has_more=params.offset + len(sessions) < total,
        )

    async def live_schedule(self, now: datetime | None = None) -> LiveScheduleResponse:
        sessions = await Session.find(
            Session.is_published == True,  # noqa: E712
            Session.live_at != None,  # noqa: E711
        ).to_list()

        upcoming, past = partition_live(sessions, now or utc_now())
        return LiveScheduleResponse(
            upcoming=[to_response(s) for s in upcoming],
            past=[to_response(s) for s in past],
        )

    async def list_all(self) -> list[Session]:
        """Every session including drafts, newest first."""
        return await Session.find_all().sort("-created_at", "-session_id").to_list()

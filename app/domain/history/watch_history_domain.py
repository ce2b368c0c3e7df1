"""Per-user watch progress, one row per (user, session)."""

from beanie.odm.operators.update.general import Set
from pymongo.errors import DuplicateKeyError

from app.schemas import Session, WatchHistory
from app.schemas.schema_utils import utc_now
from app.utils.app_errors import AppErrorCode, not_found

from .watch_history_models import RecordProgressParams, WatchHistoryItem


def _item(row: WatchHistory) -> WatchHistoryItem:
    return WatchHistoryItem(
        session_id=row.session_id, progress=row.progress, watched_at=row.watched_at
    )


class WatchHistoryService:
    async def record_progress(self, user_id: str, params: RecordProgressParams) -> WatchHistoryItem:
        if not await Session.find_one(Session.session_id == params.session_id):
            raise not_found(
                AppErrorCode.E_SESSION_NOT_FOUND, f"Session not found: {params.session_id}"
            )

        now = utc_now()
        existing = await WatchHistory.find_one(
            WatchHistory.user_id == user_id,
            WatchHistory.session_id == params.session_id,
        )
        if existing is None:
            row = WatchHistory(
                user_id=user_id,
                session_id=params.session_id,
                progress=params.progress,
                watched_at=now,
            )
            try:
                await row.insert()
                return _item(row)
            except DuplicateKeyError:
                # Inserted concurrently, fall through to the update
                pass

        await WatchHistory.find(
            WatchHistory.user_id == user_id,
            WatchHistory.session_id == params.session_id,
        ).update(Set({WatchHistory.progress: params.progress, WatchHistory.watched_at: now}))
        return WatchHistoryItem(
            session_id=params.session_id, progress=params.progress, watched_at=now
        )

    async def list_history(self, user_id: str, limit: int = 50) -> list[WatchHistoryItem]:
        rows = (
            await WatchHistory.find(WatchHistory.user_id == user_id)
            .sort("-watched_at")
            .limit(limit)
            .to_list()
        )
        return [_item(r) for r in rows]

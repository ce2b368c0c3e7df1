"""Favorites ledger.

The store is the only source of truth: every read goes to it. A
(user_id, session_id) pair exists at most once, backed by a unique index.
"""

from beanie.operators import In
from loguru import logger
from pymongo.errors import DuplicateKeyError

from app.schemas import Favorite, Session
from app.utils.app_errors import AppErrorCode, not_found

from ..catalog.session._sessions import to_response
from .favorite_models import FavoriteItem, FavoriteState


class FavoriteService:
    async def _require_session(self, session_id: str) -> None:
        if not await Session.find_one(Session.session_id == session_id):
            raise not_found(AppErrorCode.E_SESSION_NOT_FOUND, f"Session not found: {session_id}")

    async def is_favorite(self, user_id: str | None, session_id: str) -> bool:
        if not user_id:
            return False
        favorite = await Favorite.find_one(
            Favorite.user_id == user_id,
            Favorite.session_id == session_id,
        )
        return favorite is not None

    async def favorite_ids(self, user_id: str) -> list[str]:
        favorites = await Favorite.find(Favorite.user_id == user_id).to_list()
        return [f.session_id for f in favorites]

    async def list_favorites(self, user_id: str) -> list[FavoriteItem]:
        """Favorited sessions, most recently favorited first. Drafts are hidden."""
        favorites = await Favorite.find(Favorite.user_id == user_id).sort("-created_at").to_list()
        if not favorites:
            return []

        sessions = await Session.find(
            In(Session.session_id, [f.session_id for f in favorites]),
            Session.is_published == True,  # noqa: E712
        ).to_list()
        by_id = {s.session_id: s for s in sessions}

        return [
            FavoriteItem(session=to_response(by_id[f.session_id]), favorited_at=f.created_at)
            for f in favorites
            if f.session_id in by_id
        ]

    async def add_favorite(self, user_id: str, session_id: str) -> FavoriteState:
        await self._require_session(session_id)
        try:
            await Favorite(user_id=user_id, session_id=session_id).insert()
        except DuplicateKeyError:
            # Concurrent insert for the same pair (e.g. a double click)
            logger.debug("favorite already exists user={} session={}", user_id, session_id)
        return FavoriteState(session_id=session_id, is_favorite=True)

    async def remove_favorite(self, user_id: str, session_id: str) -> FavoriteState:
        await Favorite.find(
            Favorite.user_id == user_id,
            Favorite.session_id == session_id,
        ).delete()
        return FavoriteState(session_id=session_id, is_favorite=False)

    async def toggle_favorite(
        self,
        user_id: str | None,
        session_id: str,
        currently_favorite: bool | None = None,
    ) -> FavoriteState:
        """Flip the favorite state and report the new one.

        `currently_favorite` is the state the caller saw when the user clicked.
        Passing it makes a rapid double click converge on a single toggle; when
        omitted, the store decides. Anonymous callers get "not favorited" and
        nothing is written.
        """
        if not user_id:
            return FavoriteState(session_id=session_id, is_favorite=False)

        if currently_favorite is None:
            currently_favorite = await self.is_favorite(user_id, session_id)

        if currently_favorite:
            return await self.remove_favorite(user_id, session_id)
        return await self.add_favorite(user_id, session_id)

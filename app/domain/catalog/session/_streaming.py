"""Streaming toggle: which single session is broadcasting right now.

The `live_state` row is the source of truth and is only changed by a version
compare-and-swap. `Session.streaming_now` is a mirror kept for listings.
"""

from beanie.odm.operators.update.general import Set
from loguru import logger
from pymongo.errors import DuplicateKeyError

from app.schemas import LiveState, Session
from app.schemas.live_state import CURRENT_LIVE_KEY
from app.schemas.schema_utils import utc_now
from app.utils.app_errors import AppErrorCode, conflict, invalid_request

from ._sessions import SessionOperations, to_response
from .session_models import SessionResponse


class StreamingOperations:
    def __init__(self, sessions: SessionOperations, max_retries: int = 3):
        self._sessions = sessions
        self.max_retries = max(1, max_retries)

    async def _load_state(self) -> LiveState:
        state = await LiveState.find_one(LiveState.state_key == CURRENT_LIVE_KEY)
        if state is not None:
            return state

        state = LiveState()
        try:
            await state.insert()
        except DuplicateKeyError:
            state = await LiveState.find_one(LiveState.state_key == CURRENT_LIVE_KEY)
            if state is None:
                raise conflict("Live state unavailable", AppErrorCode.E_LIVE_STATE_CONFLICT)
        return state

    async def _swap(self, state: LiveState, session_id: str | None) -> bool:
        result = await LiveState.find(
            LiveState.state_key == CURRENT_LIVE_KEY,
            LiveState.version == state.version,
        ).update(
            Set(
                {
                    LiveState.session_id: session_id,
                    LiveState.version: state.version + 1,
                    LiveState.updated_at: utc_now(),
                }
            )
        )
        return bool(result and result.modified_count > 0)

    async def _set_pointer(self, session_id: str | None, *, only_from: str | None = None) -> bool:
        """CAS the pointer to `session_id`, retrying on version races.

        With `only_from` given, only swap while the pointer still names it.
        Returns False when the precondition no longer holds.
        """
        for attempt in range(1, self.max_retries + 1):
            state = await self._load_state()
            if only_from is not None and state.session_id != only_from:
                return False
            if state.session_id == session_id:
                return True
            if await self._swap(state, session_id):
                logger.debug(
                    "live pointer {} -> {} (v{})", state.session_id, session_id, state.version + 1
                )
                return True
            logger.info("live pointer CAS lost at v{} (attempt {})", state.version, attempt)

        raise conflict(
            "Live state changed concurrently, try again", AppErrorCode.E_LIVE_STATE_CONFLICT
        )

    async def _mirror(self, session_id: str | None) -> None:
        """Make `streaming_now` true on `session_id` only (or on none)."""
        now = utc_now()
        await Session.find(
            Session.streaming_now == True,  # noqa: E712
            Session.session_id != session_id,
        ).update(Set({Session.streaming_now: False, Session.updated_at: now}))
        if session_id is not None:
            await Session.find(Session.session_id == session_id).update(
                Set({Session.streaming_now: True, Session.updated_at: now})
            )

    async def go_live(self, session_id: str) -> SessionResponse:
        """Make `session_id` the only streaming session. Videos cannot go live."""
        session = await self._sessions.get_session_doc(session_id)
        if session.live_at is None:
            raise invalid_request(f"Session {session_id} is not a live session")

        await self._set_pointer(session_id)

        await self._mirror(session_id)

        # A concurrent go_live may have taken the pointer after our swap
        state = await self._load_state()
        if state.session_id != session_id:
            await self._mirror(state.session_id)
            raise conflict(
                f"Session {state.session_id} went live concurrently",
                AppErrorCode.E_LIVE_STATE_CONFLICT,
            )

        logger.info("Session {} is streaming now", session_id)
        return to_response(await self._sessions.get_session_doc(session_id))

    async def end_stream(self, session_id: str) -> SessionResponse:
        session = await self._sessions.get_session_doc(session_id)

        if session.streaming_now:
            session.streaming_now = False
            session.updated_at = utc_now()
            await session.save()

        await self.clear_pointer(session_id)
        logger.info("Session {} stopped streaming", session_id)
        return to_response(session)

    async def clear_pointer(self, session_id: str) -> bool:
        """Clear the pointer only if it still names `session_id`."""
        return await self._set_pointer(None, only_from=session_id)

    async def current(self) -> SessionResponse | None:
        """The published session the pointer names, if any.

        A draft may be streaming for admins; the public sees None until it is
        published.
        """
        state = await LiveState.find_one(LiveState.state_key == CURRENT_LIVE_KEY)
        if state is None or state.session_id is None:
            return None

        session = await Session.find_one(
            Session.session_id == state.session_id,
            Session.is_published == True,  # noqa: E712
        )
        if session is None:
            logger.debug("live pointer names unpublished session {}", state.session_id)
            return None
        return to_response(session)

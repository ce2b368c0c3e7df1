"""Pure classification and ordering rules for session listings.

A session with `live_at` is a live/schedule item; without it, an on-demand video.
"""

from collections.abc import Iterable
from datetime import datetime

from app.schemas import Session


def is_live_item(session: Session) -> bool:
    return session.live_at is not None


def split_videos_and_live(sessions: Iterable[Session]) -> tuple[list[Session], list[Session]]:
    videos: list[Session] = []
    live: list[Session] = []
    for session in sessions:
        (live if is_live_item(session) else videos).append(session)
    return videos, live


def is_upcoming(session: Session, now: datetime) -> bool:
    return session.streaming_now or (session.live_at is not None and session.live_at >= now)


def sort_upcoming(sessions: Iterable[Session]) -> list[Session]:
    """Streaming session first regardless of date, then soonest first."""
    return sorted(sessions, key=lambda s: (not s.streaming_now, s.live_at))


def sort_past(sessions: Iterable[Session]) -> list[Session]:
    """Most recently concluded first."""
    return sorted(sessions, key=lambda s: s.live_at, reverse=True)  # type: ignore[arg-type,return-value]


def partition_live(
    sessions: Iterable[Session], now: datetime
) -> tuple[list[Session], list[Session]]:
    """Split live items into (upcoming, past), each in display order."""
    upcoming: list[Session] = []
    past: list[Session] = []
    for session in sessions:
        if not is_live_item(session):
            continue
        (upcoming if is_upcoming(session, now) else past).append(session)
    return sort_upcoming(upcoming), sort_past(past)


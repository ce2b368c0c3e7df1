"""Tests for video/live classification and live schedule ordering."""

from datetime import UTC, datetime, timedelta

import pytest

from app.domain.catalog.session._listing import (
    is_live_item,
    partition_live,
    split_videos_and_live,
)
from app.schemas import Session

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def make_session(name: str, **kwargs) -> Session:
    return Session(session_id=f"se_{name}", slug=name, title=name, **kwargs)


@pytest.mark.usefixtures("beanie_db")
class TestClassification:
    def test_live_at_decides_kind(self):
        video = make_session("video")
        live = make_session("live", is_live=True, live_at=NOW)

        assert not is_live_item(video)
        assert is_live_item(live)

    def test_is_live_flag_alone_is_not_live(self):
        # Only live_at classifies a session as live
        odd = make_session("odd", is_live=True)
        assert not is_live_item(odd)

    def test_split_keeps_each_session_in_exactly_one_list(self):
        sessions = [
            make_session("a"),
            make_session("b", live_at=NOW),
            make_session("c"),
            make_session("d", live_at=NOW - timedelta(days=1)),
        ]

        videos, live = split_videos_and_live(sessions)

        assert [s.slug for s in videos] == ["a", "c"]
        assert [s.slug for s in live] == ["b", "d"]


@pytest.mark.usefixtures("beanie_db")
class TestPartitionLive:
    def test_upcoming_sorted_soonest_first(self):
        later = make_session("later", live_at=NOW + timedelta(days=2))
        sooner = make_session("sooner", live_at=NOW + timedelta(hours=1))

        upcoming, past = partition_live([later, sooner], NOW)

        assert [s.slug for s in upcoming] == ["sooner", "later"]
        assert past == []

    def test_past_sorted_most_recent_first(self):
        old = make_session("old", live_at=NOW - timedelta(days=10))
        recent = make_session("recent", live_at=NOW - timedelta(hours=2))

        upcoming, past = partition_live([old, recent], NOW)

        assert upcoming == []
        assert [s.slug for s in past] == ["recent", "old"]

    def test_streaming_session_first_even_if_started_in_past(self):
        streaming = make_session("streaming", live_at=NOW - timedelta(hours=1), streaming_now=True)
        soon = make_session("soon", live_at=NOW + timedelta(minutes=5))

        upcoming, past = partition_live([soon, streaming], NOW)

        assert [s.slug for s in upcoming] == ["streaming", "soon"]
        assert past == []

    def test_start_exactly_now_is_upcoming(self):
        upcoming, past = partition_live([make_session("now", live_at=NOW)], NOW)
        assert [s.slug for s in upcoming] == ["now"]
        assert past == []

    def test_videos_are_ignored(self):
        upcoming, past = partition_live([make_session("video")], NOW)
        assert upcoming == [] and past == []

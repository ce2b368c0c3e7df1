from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from .serializers import serialize_utc_datetime


class RecordProgressIn(BaseModel):
    session_id: str
    progress: int = Field(default=0, ge=0, description="Seconds watched")


class WatchHistoryOut(BaseModel):
    session_id: str
    progress: int
    watched_at: datetime

    @field_serializer("watched_at")
    @classmethod
    def serialize_datetime(cls, v: datetime) -> str:
        return serialize_utc_datetime(v)


class ListHistoryOut(BaseModel):
    history: list[WatchHistoryOut]

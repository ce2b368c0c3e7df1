"""Watch history domain models."""

from datetime import datetime

from pydantic import BaseModel, Field


class RecordProgressParams(BaseModel):
    session_id: str
    progress: int = Field(default=0, ge=0)


class WatchHistoryItem(BaseModel):
    session_id: str
    progress: int
    watched_at: datetime

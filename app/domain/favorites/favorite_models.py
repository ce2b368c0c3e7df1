"""Favorites domain models."""

from datetime import datetime

from pydantic import BaseModel

from ..catalog.session.session_models import SessionResponse


class FavoriteState(BaseModel):
    session_id: str
    is_favorite: bool


class FavoriteItem(BaseModel):
    session: SessionResponse
    favorited_at: datetime

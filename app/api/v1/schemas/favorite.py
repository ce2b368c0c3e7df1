from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from .serializers import serialize_utc_datetime
from .session import SessionOut


class FavoriteIn(BaseModel):
    session_id: str


class ToggleFavoriteIn(BaseModel):
    session_id: str
    currently_favorite: bool | None = Field(
        default=None,
        description="State shown to the user when they clicked; omit to let the server decide",
    )


class FavoriteStateOut(BaseModel):
    session_id: str
    is_favorite: bool


class FavoriteItemOut(BaseModel):
    session: SessionOut
    favorited_at: datetime

    @field_serializer("favorited_at")
    @classmethod
    def serialize_datetime(cls, v: datetime) -> str:
        return serialize_utc_datetime(v)


class ListFavoritesOut(BaseModel):
    favorites: list[FavoriteItemOut]


class FavoriteIdsOut(BaseModel):
    session_ids: list[str]

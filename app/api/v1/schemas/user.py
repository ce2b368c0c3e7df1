from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from .serializers import serialize_optional_utc_datetime


class CheckAdminOut(BaseModel):
    is_admin: bool


class AdminStatusOut(BaseModel):
    user_id: str
    is_admin: bool


class SetAdminIn(BaseModel):
    user_id: str
    is_admin: bool


class BootstrapAdminIn(BaseModel):
    email: str = Field(min_length=3, description="Email of an existing user")


class UserOut(BaseModel):
    id: str
    email: str | None = None
    created_at: datetime | None = None
    last_sign_in_at: datetime | None = None
    is_admin: bool

    @field_serializer("created_at", "last_sign_in_at")
    @classmethod
    def serialize_datetime(cls, v: datetime | None) -> str | None:
        return serialize_optional_utc_datetime(v)


class ListUsersOut(BaseModel):
    users: list[UserOut]

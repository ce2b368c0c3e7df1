"""Admin domain models."""

from datetime import datetime

from pydantic import BaseModel


class UserInfo(BaseModel):
    id: str
    email: str | None = None
    created_at: datetime | None = None
    last_sign_in_at: datetime | None = None
    is_admin: bool = False


class AdminStatus(BaseModel):
    user_id: str
    is_admin: bool

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from .serializers import serialize_utc_datetime


class CategoryOut(BaseModel):
    category_id: str
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    order: int = 0
    created_at: datetime

    @field_serializer("created_at")
    @classmethod
    def serialize_datetime(cls, v: datetime) -> str:
        return serialize_utc_datetime(v)


class ThemeOut(BaseModel):
    theme_id: str
    name: str
    slug: str
    description: str | None = None
    color: str | None = None
    created_at: datetime

    @field_serializer("created_at")
    @classmethod
    def serialize_datetime(cls, v: datetime) -> str:
        return serialize_utc_datetime(v)


class ListCategoriesOut(BaseModel):
    categories: list[CategoryOut]


class ListThemesOut(BaseModel):
    themes: list[ThemeOut]


class CreateCategoryIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str | None = Field(default=None, description="Derived from name when omitted")
    description: str | None = None
    icon: str | None = Field(default=None, description="Icon name shown in the UI")
    order: int = 0


class UpdateCategoryIn(CreateCategoryIn):
    category_id: str


class CategoryIdIn(BaseModel):
    category_id: str


class CreateThemeIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str | None = Field(default=None, description="Derived from name when omitted")
    description: str | None = None
    color: str | None = Field(
        default=None, pattern=r"^#[0-9a-fA-F]{6}$", description="Hex color, e.g. #f59e0b"
    )


class UpdateThemeIn(CreateThemeIn):
    theme_id: str


class ThemeIdIn(BaseModel):
    theme_id: str


class DeleteTaxonomyOut(BaseModel):
    deleted: bool = True
    sessions_detached: int


class SeedOut(BaseModel):
    categories_created: int
    themes_created: int

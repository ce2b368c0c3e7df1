"""Category and theme domain models."""

from datetime import datetime

from pydantic import BaseModel, Field


class CategoryResponse(BaseModel):
    category_id: str
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    order: int = 0
    created_at: datetime


class ThemeResponse(BaseModel):
    theme_id: str
    name: str
    slug: str
    description: str | None = None
    color: str | None = None
    created_at: datetime


class CategoryParams(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str | None = None  # derived from name when omitted
    description: str | None = None
    icon: str | None = None
    order: int = 0


class ThemeParams(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str | None = None
    description: str | None = None
    color: str | None = Field(default=None, pattern=r"^#[0-9a-fA-F]{6}$")


class SeedResult(BaseModel):
    categories_created: int
    themes_created: int


DEFAULT_CATEGORIES: list[CategoryParams] = [
    CategoryParams(
        name="Vinyasa",
        slug="vinyasa",
        description="Flowing sequences linking breath with movement",
        icon="flame",
        order=1,
    ),
    CategoryParams(
        name="Hatha",
        slug="hatha",
        description="Traditional yoga focusing on physical postures",
        icon="sun",
        order=2,
    ),
    CategoryParams(
        name="Yin",
        slug="yin",
        description="Slow-paced style targeting deep connective tissues",
        icon="moon",
        order=3,
    ),
    CategoryParams(
        name="Power",
        slug="power",
        description="Athletic, fitness-based yoga approach",
        icon="dumbbell",
        order=4,
    ),
    CategoryParams(
        name="Meditation",
        slug="meditation",
        description="Mindfulness and breathing practices",
        icon="wind",
        order=5,
    ),
]

DEFAULT_THEMES: list[ThemeParams] = [
    ThemeParams(
        name="Morning Flow",
        slug="morning-flow",
        description="Energize your morning with these flows",
        color="#f59e0b",
    ),
    ThemeParams(
        name="Stress Relief",
        slug="stress-relief",
        description="Release tension and find calm",
        color="#10b981",
    ),
    ThemeParams(
        name="Flexibility",
        slug="flexibility",
        description="Improve your range of motion",
        color="#8b5cf6",
    ),
    ThemeParams(
        name="Strength",
        slug="strength",
        description="Build muscular strength and endurance",
        color="#ef4444",
    ),
]

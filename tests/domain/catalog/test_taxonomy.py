"""Tests for categories, themes and the default seed."""

import pytest

from app.domain.catalog.taxonomy.taxonomy_domain import TaxonomyService
from app.domain.catalog.taxonomy.taxonomy_models import CategoryParams, ThemeParams
from app.schemas import Category, Session, Theme
from app.utils.app_errors import AppError, AppErrorCode


@pytest.mark.usefixtures("clear_collections")
class TestCategories:
    async def test_create_derives_slug(self, beanie_db, taxonomy_service: TaxonomyService):
        result = await taxonomy_service.create_category(
            CategoryParams(name="Power Yoga", icon="dumbbell", order=4)
        )

        assert result.category_id.startswith("cat_")
        assert result.slug == "power-yoga"
        assert result.icon == "dumbbell"

    async def test_duplicate_slug_is_conflict(self, beanie_db, taxonomy_service: TaxonomyService):
        await taxonomy_service.create_category(CategoryParams(name="Yin"))

        with pytest.raises(AppError) as exc_info:
            await taxonomy_service.create_category(CategoryParams(name="YIN"))

        assert exc_info.value.errcode == AppErrorCode.E_CONFLICT
        assert exc_info.value.status_code == 409

    async def test_list_by_order_then_name(self, beanie_db, taxonomy_service: TaxonomyService):
        await taxonomy_service.create_category(CategoryParams(name="Zen", order=1))
        await taxonomy_service.create_category(CategoryParams(name="Breath", order=2))
        await taxonomy_service.create_category(CategoryParams(name="Align", order=1))

        result = await taxonomy_service.list_categories()

        assert [c.name for c in result] == ["Align", "Zen", "Breath"]

    async def test_update(self, beanie_db, taxonomy_service: TaxonomyService):
        created = await taxonomy_service.create_category(CategoryParams(name="Hatha"))

        updated = await taxonomy_service.update_category(
            created.category_id, CategoryParams(name="Hatha Yoga", description="Slow")
        )

        assert updated.name == "Hatha Yoga"
        assert updated.slug == "hatha"
        assert updated.description == "Slow"

    async def test_delete_detaches_sessions(self, beanie_db, taxonomy_service: TaxonomyService):
        created = await taxonomy_service.create_category(CategoryParams(name="Vinyasa"))
        await Session(
            session_id="se_1", slug="s1", title="S1", category_id=created.category_id
        ).insert()

        detached = await taxonomy_service.delete_category(created.category_id)

        assert detached == 1
        assert await Category.count() == 0
        session = await Session.find_one(Session.session_id == "se_1")
        assert session is not None and session.category_id is None

    async def test_delete_missing(self, beanie_db, taxonomy_service: TaxonomyService):
        with pytest.raises(AppError) as exc_info:
            await taxonomy_service.delete_category("cat_missing")
        assert exc_info.value.errcode == AppErrorCode.E_CATEGORY_NOT_FOUND


@pytest.mark.usefixtures("clear_collections")
class TestThemes:
    async def test_create_and_list_by_name(self, beanie_db, taxonomy_service: TaxonomyService):
        await taxonomy_service.create_theme(ThemeParams(name="Strength", color="#ef4444"))
        await taxonomy_service.create_theme(ThemeParams(name="Flexibility"))

        result = await taxonomy_service.list_themes()

        assert [t.name for t in result] == ["Flexibility", "Strength"]
        assert result[1].color == "#ef4444"

    async def test_delete_detaches_sessions(self, beanie_db, taxonomy_service: TaxonomyService):
        theme = await taxonomy_service.create_theme(ThemeParams(name="Calm"))
        await Session(session_id="se_1", slug="s1", title="S1", theme_id=theme.theme_id).insert()

        detached = await taxonomy_service.delete_theme(theme.theme_id)

        assert detached == 1
        assert await Theme.count() == 0


@pytest.mark.usefixtures("clear_collections")
class TestSeed:
    async def test_seed_is_idempotent(self, beanie_db, taxonomy_service: TaxonomyService):
        first = await taxonomy_service.seed_taxonomy()
        second = await taxonomy_service.seed_taxonomy()

        assert first.categories_created == 5
        assert first.themes_created == 4
        assert second.categories_created == 0
        assert second.themes_created == 0
        assert await Category.count() == 5
        assert await Theme.count() == 4

    async def test_seed_keeps_existing_rows(self, beanie_db, taxonomy_service: TaxonomyService):
        await taxonomy_service.create_category(CategoryParams(name="Hatha", icon="custom"))

        result = await taxonomy_service.seed_taxonomy()

        assert result.categories_created == 4
        hatha = await Category.find_one(Category.slug == "hatha")
        assert hatha is not None and hatha.icon == "custom"

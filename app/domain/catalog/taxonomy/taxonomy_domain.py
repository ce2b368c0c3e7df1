"""Category and theme service.

Deleting a category or theme never deletes sessions; their reference is
set to null instead.
"""

from beanie.odm.operators.update.general import Set
from loguru import logger
from pymongo.errors import DuplicateKeyError

from app.schemas import Category, Session, Theme
from app.schemas.schema_utils import utc_now
from app.utils.app_errors import AppErrorCode, conflict, invalid_request, not_found

from ...utils.idgen import new_category_id, new_theme_id
from ...utils.slug import slugify
from .taxonomy_models import (
    DEFAULT_CATEGORIES,
    DEFAULT_THEMES,
    CategoryParams,
    CategoryResponse,
    SeedResult,
    ThemeParams,
    ThemeResponse,
)


def _taxonomy_slug(name: str, slug: str | None) -> str:
    value = slugify(slug or name)
    if not value:
        raise invalid_request("Slug cannot be empty")
    return value


def _category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(**category.model_dump(exclude={"id", "revision_id"}))


def _theme_response(theme: Theme) -> ThemeResponse:
    return ThemeResponse(**theme.model_dump(exclude={"id", "revision_id"}))


class TaxonomyService:
    # ==================== CATEGORIES ====================

    async def list_categories(self) -> list[CategoryResponse]:
        categories = await Category.find_all().sort("+order", "+name").to_list()
        return [_category_response(c) for c in categories]

    async def _get_category(self, category_id: str) -> Category:
        category = await Category.find_one(Category.category_id == category_id)
        if category is None:
            raise not_found(AppErrorCode.E_CATEGORY_NOT_FOUND, f"Category not found: {category_id}")
        return category

    async def create_category(self, params: CategoryParams) -> CategoryResponse:
        category = Category(
            category_id=new_category_id(),
            name=params.name.strip(),
            slug=_taxonomy_slug(params.name, params.slug),
            description=params.description,
            icon=params.icon,
            order=params.order,
        )
        try:
            await category.insert()
        except DuplicateKeyError as e:
            raise conflict(f"Category slug already exists: {category.slug}") from e

        logger.info("Created category {} slug={}", category.category_id, category.slug)
        return _category_response(category)

    async def update_category(self, category_id: str, params: CategoryParams) -> CategoryResponse:
        category = await self._get_category(category_id)
        category.name = params.name.strip()
        if params.slug:
            category.slug = _taxonomy_slug(params.name, params.slug)
        category.description = params.description
        category.icon = params.icon
        category.order = params.order
        try:
            await category.save()
        except DuplicateKeyError as e:
            raise conflict(f"Category slug already exists: {category.slug}") from e
        return _category_response(category)

    async def delete_category(self, category_id: str) -> int:
        """Delete the category and detach it from sessions. Returns sessions detached."""
        category = await self._get_category(category_id)
        await category.delete()

        result = await Session.find(Session.category_id == category_id).update(
            Set({Session.category_id: None, Session.updated_at: utc_now()})
        )
        detached = result.modified_count if result else 0
        logger.info("Deleted category {} (detached {} sessions)", category_id, detached)
        return detached

    # ==================== THEMES ====================

    async def list_themes(self) -> list[ThemeResponse]:
        themes = await Theme.find_all().sort("+name").to_list()
        return [_theme_response(t) for t in themes]

    async def _get_theme(self, theme_id: str) -> Theme:
        theme = await Theme.find_one(Theme.theme_id == theme_id)
        if theme is None:
            raise not_found(AppErrorCode.E_THEME_NOT_FOUND, f"Theme not found: {theme_id}")
        return theme

    async def create_theme(self, params: ThemeParams) -> ThemeResponse:
        theme = Theme(
            theme_id=new_theme_id(),
            name=params.name.strip(),
            slug=_taxonomy_slug(params.name, params.slug),
            description=params.description,
            color=params.color,
        )
        try:
            await theme.insert()
        except DuplicateKeyError as e:
            raise conflict(f"Theme slug already exists: {theme.slug}") from e

        logger.info("Created theme {} slug={}", theme.theme_id, theme.slug)
        return _theme_response(theme)

    async def update_theme(self, theme_id: str, params: ThemeParams) -> ThemeResponse:
        theme = await self._get_theme(theme_id)
        theme.name = params.name.strip()
        if params.slug:
            theme.slug = _taxonomy_slug(params.name, params.slug)
        theme.description = params.description
        theme.color = params.color
        try:
            await theme.save()
        except DuplicateKeyError as e:
            raise conflict(f"Theme slug already exists: {theme.slug}") from e
        return _theme_response(theme)

    async def delete_theme(self, theme_id: str) -> int:
        theme = await self._get_theme(theme_id)
        await theme.delete()

        result = await Session.find(Session.theme_id == theme_id).update(
            Set({Session.theme_id: None, Session.updated_at: utc_now()})
        )
        detached = result.modified_count if result else 0
        logger.info("Deleted theme {} (detached {} sessions)", theme_id, detached)
        return detached

    # ==================== SEED ====================

    async def seed_taxonomy(self) -> SeedResult:
        """Insert the default categories and themes that are missing. Existing rows are kept."""
        categories_created = 0
        for params in DEFAULT_CATEGORIES:
            if await Category.find_one(Category.slug == params.slug):
                continue
            await self.create_category(params)
            categories_created += 1

        themes_created = 0
        for params in DEFAULT_THEMES:
            if await Theme.find_one(Theme.slug == params.slug):
                continue
            await self.create_theme(params)
            themes_created += 1

        logger.info("Seeded taxonomy: {} categories, {} themes", categories_created, themes_created)
        return SeedResult(categories_created=categories_created, themes_created=themes_created)

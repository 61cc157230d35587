"""
Menu Repository - Data access for menu categories and items.
"""

from dataclasses import dataclass
from sqlalchemy.orm import contains_eager
from sqlalchemy import Select, func, select

from rest_api.models import MenuCategory, MenuItem
from shared.utils.validators import escape_like_pattern
from .base import BaseRepository, RepositoryFilters


@dataclass
class MenuItemFilters(RepositoryFilters):
    """Filters specific to menu items."""

    category_id: str | None = None


class MenuCategoryRepository(BaseRepository[MenuCategory]):
    """Repository for MenuCategory entities, ordered by display order then name."""

    @property
    def model(self) -> type[MenuCategory]:
        return MenuCategory

    def _base_query(self) -> Select:
        return select(MenuCategory).order_by(MenuCategory.order, MenuCategory.name)

    def find_by_name(self, name: str) -> MenuCategory | None:
        return self._db.scalar(select(MenuCategory).where(MenuCategory.name == name))

    def count_items(self, category_id: str) -> int:
        """Number of menu items that still reference the category."""
        query = (
            select(func.count())
            .select_from(MenuItem)
            .where(MenuItem.category_id == category_id)
        )
        return self._db.scalar(query) or 0


class MenuItemRepository(BaseRepository[MenuItem]):
    """
    Repository for MenuItem entities.

    Items are always inner-joined with their category, so every result carries
    its category and items are ordered by name.
    """

    @property
    def model(self) -> type[MenuItem]:
        return MenuItem

    def _base_query(self) -> Select:
        return (
            select(MenuItem)
            .join(MenuItem.category)
            .options(contains_eager(MenuItem.category))
            .order_by(MenuItem.name)
        )

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        """Apply category and name-search filters."""
        if not isinstance(filters, MenuItemFilters):
            filters = MenuItemFilters(**filters.__dict__)

        if filters.category_id:
            query = query.where(MenuItem.category_id == filters.category_id)

        if filters.search:
            search_term = f"%{escape_like_pattern(filters.search)}%"
            query = query.where(MenuItem.name.ilike(search_term, escape="\\"))

        return query

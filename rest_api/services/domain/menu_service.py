"""
Menu Services - categories and items.

Business rules:
- Category names are unique
- A category that still has items cannot be deleted (409)
- Every item must reference an existing category
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import MenuCategory, MenuItem
from rest_api.repositories import MenuCategoryRepository, MenuItemRepository
from rest_api.services.base_service import BaseCRUDService
from shared.security.auth import Principal
from shared.utils.admin_schemas import MenuCategoryOutput, MenuItemOutput
from shared.utils.exceptions import ConflictError, DuplicateEntityError, ValidationError


class MenuCategoryService(BaseCRUDService[MenuCategory, MenuCategoryOutput]):
    """Service for menu category management."""

    unique_field = "name"
    REQUIRED_ON_UPDATE = ("name", "order")

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MenuCategory,
            output_schema=MenuCategoryOutput,
            entity_name="Menu category",
            repository=MenuCategoryRepository(db),
            audit_target="menu_category",
        )

    @property
    def categories(self) -> MenuCategoryRepository:
        return self._repo  # type: ignore[return-value]

    def _validate_create(self, data: dict[str, Any]) -> None:
        if self.categories.find_by_name(data["name"]) is not None:
            raise DuplicateEntityError(self._entity_name, data["name"])

    def _validate_update(self, entity: MenuCategory, data: dict[str, Any]) -> None:
        name = data.get("name")
        if name is None:
            return
        existing = self.categories.find_by_name(name)
        if existing is not None and existing.id != entity.id:
            raise DuplicateEntityError(self._entity_name, name)

    def _validate_delete(self, entity: MenuCategory, actor: Principal | None) -> None:
        item_count = self.categories.count_items(entity.id)
        if item_count:
            raise ConflictError(
                f"Cannot delete category '{entity.name}': {item_count} menu item(s) still belong to it",
                category_id=entity.id,
                item_count=item_count,
            )


class MenuItemService(BaseCRUDService[MenuItem, MenuItemOutput]):
    """Service for menu item management."""

    REQUIRED_ON_UPDATE = ("category_id", "name", "price", "is_available")

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MenuItem,
            output_schema=MenuItemOutput,
            entity_name="Menu item",
            repository=MenuItemRepository(db),
            audit_target="menu_item",
        )
        self._categories = MenuCategoryRepository(db)

    def _check_category(self, category_id: str) -> None:
        if not self._categories.exists(category_id):
            raise ValidationError(
                f"Menu category with ID {category_id} does not exist",
                category_id=category_id,
            )

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._check_category(data["category_id"])

    def _validate_update(self, entity: MenuItem, data: dict[str, Any]) -> None:
        if "category_id" in data and data["category_id"] != entity.category_id:
            self._check_category(data["category_id"])

    def _prepare_update(self, entity: MenuItem, data: dict[str, Any]) -> dict[str, Any]:
        if "tags" in data and data["tags"] is None:
            data = {**data, "tags": []}
        return data

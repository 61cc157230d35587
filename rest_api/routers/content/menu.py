"""
Menu endpoints: categories and items.
Reads are public; mutations require staff.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import Principal, require_staff
from shared.utils.admin_schemas import (
    MenuCategoryCreate,
    MenuCategoryOutput,
    MenuCategoryUpdate,
    MenuItemCreate,
    MenuItemOutput,
    MenuItemUpdate,
)
from shared.utils.schemas import SuccessResponse
from rest_api.repositories import MenuItemFilters
from rest_api.services.domain import MenuCategoryService, MenuItemService


router = APIRouter(prefix="/menu", tags=["menu"])


# =============================================================================
# Categories
# =============================================================================


@router.get("/categories", response_model=list[MenuCategoryOutput])
def list_categories(db: Session = Depends(get_db)) -> list[MenuCategoryOutput]:
    """Categories ordered by display order, then name."""
    return MenuCategoryService(db).list_all()


@router.post("/categories", response_model=MenuCategoryOutput)
def create_category(
    body: MenuCategoryCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> MenuCategoryOutput:
    return MenuCategoryService(db).create(body.model_dump(), actor=principal)


@router.patch("/categories/{category_id}", response_model=MenuCategoryOutput)
def update_category(
    category_id: str,
    body: MenuCategoryUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> MenuCategoryOutput:
    return MenuCategoryService(db).update(
        category_id, body.model_dump(exclude_unset=True), actor=principal
    )


@router.delete("/categories/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> SuccessResponse:
    """Delete an empty category. Categories that still hold items are refused (409)."""
    MenuCategoryService(db).delete(category_id, actor=principal)
    return SuccessResponse()


# =============================================================================
# Items
# =============================================================================


@router.get("/items", response_model=list[MenuItemOutput])
def list_items(
    category_id: str | None = Query(default=None, alias="categoryId"),
    search: str | None = None,
    db: Session = Depends(get_db),
) -> list[MenuItemOutput]:
    """
    Menu items with their category, ordered by name.

    Query params:
        categoryId: Only items in this category
        search: Case-insensitive substring match on the item name
    """
    filters = MenuItemFilters(category_id=category_id or None, search=search)
    return MenuItemService(db).list_all(filters)


@router.get("/items/{item_id}", response_model=MenuItemOutput)
def get_item(item_id: str, db: Session = Depends(get_db)) -> MenuItemOutput:
    return MenuItemService(db).get_by_id(item_id)


@router.post("/items", response_model=MenuItemOutput)
def create_item(
    body: MenuItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> MenuItemOutput:
    return MenuItemService(db).create(body.model_dump(), actor=principal)


@router.patch("/items/{item_id}", response_model=MenuItemOutput)
def update_item(
    item_id: str,
    body: MenuItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> MenuItemOutput:
    return MenuItemService(db).update(item_id, body.model_dump(exclude_unset=True), actor=principal)


@router.delete("/items/{item_id}", response_model=SuccessResponse)
def delete_item(
    item_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> SuccessResponse:
    MenuItemService(db).delete(item_id, actor=principal)
    return SuccessResponse()

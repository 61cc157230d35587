"""
Menu Models: MenuCategory, MenuItem.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, Boolean, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class MenuCategory(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Menu section (Appetizers, Burgers, ...). Names are unique.
    A category cannot be deleted while items still reference it.
    """

    __tablename__ = "menu_categories"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    items: Mapped[list["MenuItem"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"<MenuCategory(id={self.id}, name='{self.name}', order={self.order})>"


class MenuItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    A dish or drink. Always belongs to exactly one category.
    """

    __tablename__ = "menu_items"

    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("menu_categories.id", ondelete="RESTRICT"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    spicy_level: Mapped[Optional[int]] = mapped_column(Integer)

    category: Mapped["MenuCategory"] = relationship(back_populates="items")

    __table_args__ = (
        Index("ix_menu_items_category_id", "category_id"),
        Index("ix_menu_items_name", "name"),
    )

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, name='{self.name}', price={self.price})>"

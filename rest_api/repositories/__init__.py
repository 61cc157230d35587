"""
Repository Pattern implementation.
Centralizes data access: ordering, eager loading and filter translation.

Usage:
    from rest_api.repositories import MenuItemRepository, MenuItemFilters

    repo = MenuItemRepository(db)
    items = repo.find_all(MenuItemFilters(category_id=category_id, search="wing"))
    item = repo.find_by_id(item_id)
"""

from .base import BaseRepository, RepositoryFilters
from .user import UserRepository
from .menu import (
    MenuCategoryRepository,
    MenuItemRepository,
    MenuItemFilters,
)
from .event import EventRepository, EventFilters
from .reservation import ReservationRepository, ReservationFilters
from .setting import SettingRepository
from .audit import AuditLogRepository, AuditLogFilters

__all__ = [
    # Base
    "BaseRepository",
    "RepositoryFilters",
    # User
    "UserRepository",
    # Menu
    "MenuCategoryRepository",
    "MenuItemRepository",
    "MenuItemFilters",
    # Event
    "EventRepository",
    "EventFilters",
    # Reservation
    "ReservationRepository",
    "ReservationFilters",
    # Setting
    "SettingRepository",
    # Audit
    "AuditLogRepository",
    "AuditLogFilters",
]

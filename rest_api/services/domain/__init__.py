"""
Domain Services - application layer.

Services contain the business rules and orchestrate each operation.
They use Repositories for data access and write the audit trail.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import MenuItemService

    # In router
    service = MenuItemService(db)
    items = service.list_all(MenuItemFilters(category_id=category_id))
"""

from .user_service import UserService
from .menu_service import MenuCategoryService, MenuItemService
from .event_service import EventService
from .reservation_service import ReservationService
from .setting_service import SettingService
from .upload_service import UploadService
from .audit_service import AuditLogService
from .scores_service import MockScoreProvider, ScoreProvider, ScoresService

__all__ = [
    "UserService",
    "MenuCategoryService",
    "MenuItemService",
    "EventService",
    "ReservationService",
    "SettingService",
    "UploadService",
    "AuditLogService",
    "ScoresService",
    "ScoreProvider",
    "MockScoreProvider",
]

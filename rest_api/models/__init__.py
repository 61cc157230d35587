"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and mixins
- user: User
- menu: MenuCategory, MenuItem
- event: Event
- reservation: Reservation
- setting: Setting
- upload: Upload
- audit: AuditLog
- session: HttpSession
"""

# Base classes
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, new_uuid

# Accounts
from .user import User

# Menu
from .menu import MenuCategory, MenuItem

# Site content
from .event import Event
from .reservation import Reservation
from .setting import Setting
from .upload import Upload

# Audit trail
from .audit import AuditLog

# Server-side sessions
from .session import HttpSession

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "new_uuid",
    # Accounts
    "User",
    # Menu
    "MenuCategory",
    "MenuItem",
    # Site content
    "Event",
    "Reservation",
    "Setting",
    "Upload",
    # Audit
    "AuditLog",
    # Sessions
    "HttpSession",
]

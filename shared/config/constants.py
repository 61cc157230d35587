"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, MANAGEMENT_ROLES, ReservationStatus

    if role in MANAGEMENT_ROLES:
        ...

    if status == ReservationStatus.PENDING:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "admin"
    STAFF: Final[str] = "staff"
    USER: Final[str] = "user"

    ALL: Final[list[str]] = [ADMIN, STAFF, USER]


# Role groups for common access patterns
ADMIN_ROLES: Final[frozenset[str]] = frozenset({Roles.ADMIN})
MANAGEMENT_ROLES: Final[frozenset[str]] = frozenset({Roles.ADMIN, Roles.STAFF})


# =============================================================================
# Entity Status Constants
# =============================================================================


class ReservationStatus:
    """Reservation status constants. Any status may move to any other."""

    PENDING: Final[str] = "pending"
    CONFIRMED: Final[str] = "confirmed"
    CANCELLED: Final[str] = "cancelled"

    ALL: Final[list[str]] = [PENDING, CONFIRMED, CANCELLED]


class SportType:
    """Event sport type constants."""

    NFL: Final[str] = "NFL"
    MLB: Final[str] = "MLB"
    CUSTOM: Final[str] = "Custom"

    ALL: Final[list[str]] = [NFL, MLB, CUSTOM]


class ScoreStatus:
    """Game status values produced by score providers."""

    SCHEDULED: Final[str] = "scheduled"
    LIVE: Final[str] = "live"
    FINAL: Final[str] = "final"


class AuditAction:
    """Actions recorded in the audit log."""

    CREATE: Final[str] = "CREATE"
    UPDATE: Final[str] = "UPDATE"
    DELETE: Final[str] = "DELETE"
    UPSERT: Final[str] = "UPSERT"
    UPLOAD: Final[str] = "UPLOAD"


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits."""

    MAX_USERNAME_LENGTH: Final[int] = 64
    MIN_PASSWORD_LENGTH: Final[int] = 6
    MAX_PASSWORD_LENGTH: Final[int] = 128
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_TAGS: Final[int] = 20
    MAX_TAG_LENGTH: Final[int] = 40
    MIN_SPICY_LEVEL: Final[int] = 0
    MAX_SPICY_LEVEL: Final[int] = 5
    MIN_PARTY_SIZE: Final[int] = 1
    MAX_PARTY_SIZE: Final[int] = 100
    MAX_SETTING_KEY_LENGTH: Final[int] = 100
    MAX_SEARCH_TERM_LENGTH: Final[int] = 100
    DEFAULT_AUDIT_PAGE_SIZE: Final[int] = 50
    MAX_AUDIT_PAGE_SIZE: Final[int] = 500


# =============================================================================
# Uploads
# =============================================================================

ALLOWED_IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".jpeg", ".jpg", ".png", ".gif", ".webp"}
)
ALLOWED_IMAGE_MIME_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)

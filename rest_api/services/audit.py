"""
Audit logging service.
Records every mutation made through the API for the admin audit trail.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from rest_api.models import AuditLog
from shared.config.constants import AuditAction

# Never copied into audit metadata
SENSITIVE_FIELDS = frozenset({"password"})


def log_change(
    db: Session,
    *,
    actor_user_id: Optional[str],
    target_type: str,
    target_id: Optional[str],
    action: str,
    old_values: Optional[dict] = None,
    new_values: Optional[dict] = None,
    extra: Optional[dict] = None,
) -> AuditLog:
    """
    Log a change to an entity.

    Args:
        db: Database session
        actor_user_id: User who made the change (None for anonymous requests)
        target_type: Type of entity (e.g., "menu_item", "reservation")
        target_id: ID (or key) of the entity
        action: Action performed (CREATE, UPDATE, DELETE, UPSERT, UPLOAD)
        old_values: Previous state of the entity (for UPDATE/DELETE)
        new_values: New state of the entity (for CREATE/UPDATE)
        extra: Additional metadata stored alongside the values

    Returns:
        Created AuditLog entry
    """
    meta: dict[str, Any] = {}

    if action in (AuditAction.UPDATE, AuditAction.UPSERT) and old_values and new_values:
        changes = {}
        for key in set(old_values.keys()) | set(new_values.keys()):
            old_val = old_values.get(key)
            new_val = new_values.get(key)
            if old_val != new_val:
                changes[key] = {"old": old_val, "new": new_val}
        meta["changes"] = changes
    elif action == AuditAction.DELETE and old_values:
        meta["old"] = old_values
    elif new_values:
        meta["new"] = new_values

    if extra:
        meta.update(extra)

    audit_entry = AuditLog(
        actor_user_id=actor_user_id,
        target_type=target_type,
        target_id=target_id,
        action=action,
        meta=meta or None,
    )

    db.add(audit_entry)
    # Don't commit here - the caller commits the entity and its audit entry together
    return audit_entry


def _json_safe(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


def serialize_model(obj: Any, exclude: frozenset[str] | set[str] | None = None) -> dict:
    """
    Serialize a SQLAlchemy model to a JSON-safe dictionary for audit logging.
    Sensitive fields are always dropped.
    """
    excluded = SENSITIVE_FIELDS | set(exclude or ())

    result = {}
    for column in obj.__table__.columns:
        if column.key in excluded:
            continue
        result[column.key] = _json_safe(getattr(obj, column.key))

    return result


def snapshot(values: dict[str, Any]) -> dict[str, Any]:
    """JSON-safe copy of an arbitrary dict of field values."""
    return {k: _json_safe(v) for k, v in values.items() if k not in SENSITIVE_FIELDS}

"""
Audit log viewing endpoint. Admin only.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.config.constants import Limits
from shared.infrastructure.db import get_db
from shared.security.auth import Principal, require_admin
from shared.utils.schemas import AuditLogOutput
from rest_api.services.domain import AuditLogService


router = APIRouter(prefix="/audit-logs", tags=["admin-audit"])


@router.get("", response_model=list[AuditLogOutput])
def list_audit_logs(
    target_type: str | None = Query(default=None, alias="targetType"),
    target_id: str | None = Query(default=None, alias="targetId"),
    limit: int = Query(default=Limits.DEFAULT_AUDIT_PAGE_SIZE, ge=1, le=Limits.MAX_AUDIT_PAGE_SIZE),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin),
) -> list[AuditLogOutput]:
    """Recent audit entries, newest first."""
    return AuditLogService(db).list_recent(target_type=target_type, target_id=target_id, limit=limit)

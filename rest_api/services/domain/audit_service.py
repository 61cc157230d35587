"""
Audit Log Service - read access to the audit trail for administrators.
"""

from sqlalchemy.orm import Session

from rest_api.repositories import AuditLogFilters, AuditLogRepository
from shared.config.constants import Limits
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import AuditLogOutput


class AuditLogService:
    """Lists recent audit entries, newest first."""

    def __init__(self, db: Session):
        self._repo = AuditLogRepository(db)

    def list_recent(
        self,
        target_type: str | None = None,
        target_id: str | None = None,
        limit: int = Limits.DEFAULT_AUDIT_PAGE_SIZE,
    ) -> list[AuditLogOutput]:
        if limit < 1:
            raise ValidationError("limit must be a positive integer", limit=limit)

        filters = AuditLogFilters(target_type=target_type, target_id=target_id, limit=limit)
        return [AuditLogOutput.model_validate(e) for e in self._repo.find_all(filters)]

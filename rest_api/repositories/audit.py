"""
Audit Log Repository - Read access to the audit trail.
"""

from dataclasses import dataclass
from sqlalchemy import Select, select

from rest_api.models import AuditLog
from shared.config.constants import Limits
from .base import BaseRepository, RepositoryFilters


@dataclass
class AuditLogFilters(RepositoryFilters):
    """Filters specific to audit entries."""

    target_type: str | None = None
    target_id: str | None = None
    limit: int = Limits.DEFAULT_AUDIT_PAGE_SIZE

    def __post_init__(self):
        super().__post_init__()
        self.limit = min(max(1, self.limit), Limits.MAX_AUDIT_PAGE_SIZE)


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository for AuditLog entries, newest first."""

    @property
    def model(self) -> type[AuditLog]:
        return AuditLog

    def _base_query(self) -> Select:
        return select(AuditLog).order_by(AuditLog.created_at.desc())

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, AuditLogFilters):
            filters = AuditLogFilters(**filters.__dict__)

        if filters.target_type:
            query = query.where(AuditLog.target_type == filters.target_type)
        if filters.target_id:
            query = query.where(AuditLog.target_id == filters.target_id)

        return query.limit(filters.limit)

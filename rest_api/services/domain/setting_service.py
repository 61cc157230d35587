"""
Setting Service - site configuration key-value store.

Writes use upsert-by-key: insert when the key is absent, otherwise overwrite
the value and refresh updated_at. Repeating the same upsert leaves exactly
one row with the same value.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Setting
from rest_api.repositories import SettingRepository
from rest_api.services.audit import log_change
from rest_api.services.base_service import BaseCRUDService, actor_id
from shared.config.constants import AuditAction
from shared.config.logging import get_logger
from shared.security.auth import Principal
from shared.utils.admin_schemas import SettingOutput
from shared.utils.exceptions import NotFoundError

logger = get_logger(__name__)


class SettingService(BaseCRUDService[Setting, SettingOutput]):
    """Service for site settings."""

    unique_field = "key"

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Setting,
            output_schema=SettingOutput,
            entity_name="Setting",
            repository=SettingRepository(db),
            audit_target="setting",
        )

    @property
    def settings_repo(self) -> SettingRepository:
        return self._repo  # type: ignore[return-value]

    def get_by_key(self, key: str) -> SettingOutput:
        setting = self.settings_repo.find_by_key(key)
        if setting is None:
            raise NotFoundError(self._entity_name, key)
        return self.to_output(setting)

    def upsert(self, key: str, value: Any, actor: Principal | None = None) -> SettingOutput:
        """Insert or overwrite the setting stored under `key`."""
        setting = self.settings_repo.find_by_key(key)
        created = setting is None
        old_value = None if created else setting.value

        if created:
            setting = Setting(key=key, value=value)
            self._db.add(setting)
        else:
            setting.value = value
            setting.updated_at = datetime.now(timezone.utc)

        try:
            self._db.flush()
            log_change(
                self._db,
                actor_user_id=actor_id(actor),
                target_type=self._audit_target,
                target_id=key,
                action=AuditAction.UPSERT,
                old_values=None if created else {"value": old_value},
                new_values={"value": value},
                extra={"created": created},
            )
        except IntegrityError as e:
            # Concurrent insert of the same key
            self._db.rollback()
            self._raise_integrity(e, {"key": key})
        self._commit("save", {"key": key})
        self._db.refresh(setting)

        logger.info("Setting saved", key=key, created=created)
        return self.to_output(setting)


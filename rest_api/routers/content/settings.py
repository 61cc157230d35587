"""
Site settings endpoints (hours, contact details, hero copy, social links).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import Principal, require_staff
from shared.utils.admin_schemas import SettingOutput, SettingUpsert
from rest_api.services.domain import SettingService


router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=list[SettingOutput])
def list_settings(db: Session = Depends(get_db)) -> list[SettingOutput]:
    """All settings ordered by key."""
    return SettingService(db).list_all()


@router.get("/{key}", response_model=SettingOutput)
def get_setting(key: str, db: Session = Depends(get_db)) -> SettingOutput:
    return SettingService(db).get_by_key(key)


@router.post("", response_model=SettingOutput)
def upsert_setting(
    body: SettingUpsert,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> SettingOutput:
    """Insert the setting, or overwrite the value stored under the same key."""
    return SettingService(db).upsert(body.key, body.value, actor=principal)

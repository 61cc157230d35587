"""
User management endpoints. Admin only.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import Principal, require_admin
from shared.utils.admin_schemas import UserCreate, UserOutput
from shared.utils.schemas import SuccessResponse
from rest_api.services.domain import UserService


router = APIRouter(prefix="/users", tags=["admin-users"])


def _get_service(db: Session) -> UserService:
    return UserService(db)


@router.get("", response_model=list[UserOutput])
def list_users(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin),
) -> list[UserOutput]:
    """List users ordered by creation time. Password hashes are never included."""
    return _get_service(db).list_all()


@router.post("", response_model=UserOutput)
def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin),
) -> UserOutput:
    return _get_service(db).create(body.model_dump(), actor=principal)


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_admin),
) -> SuccessResponse:
    """Delete a user. Admins cannot delete their own account."""
    _get_service(db).delete(user_id, actor=principal)
    return SuccessResponse()

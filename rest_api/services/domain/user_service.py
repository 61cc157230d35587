"""
User Service - back-office account management and credential checks.

Business rules:
- Passwords are hashed before persistence and never returned
- Usernames and emails are unique
- An admin cannot delete the account bound to their own session
"""

from __future__ import annotations

import secrets
from functools import lru_cache
from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import UserRepository
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.security.auth import Principal
from shared.security.password import hash_password, needs_rehash, verify_password
from shared.utils.admin_schemas import UserOutput
from shared.utils.exceptions import DuplicateEntityError, ValidationError

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


class UserService(BaseCRUDService[User, UserOutput]):
    """Service for user management."""

    unique_field = "username"

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=User,
            output_schema=UserOutput,
            entity_name="User",
            repository=UserRepository(db),
            audit_target="user",
        )

    @property
    def users(self) -> UserRepository:
        return self._repo  # type: ignore[return-value]

    # =========================================================================
    # Authentication
    # =========================================================================

    def authenticate(self, username: str, password: str) -> User | None:
        """
        Return the user for valid credentials, or None.

        Unknown usernames, inactive accounts and wrong passwords are
        indistinguishable to the caller.
        """
        user = self.users.find_by_username(username)
        if user is None:
            # Same bcrypt cost as a real check, so timing does not reveal usernames
            verify_password(password, _dummy_hash())
            logger.info("Authentication failed", reason="unknown_user")
            return None
        if not verify_password(password, user.password):
            logger.info("Authentication failed", reason="bad_password", user_id=user.id)
            return None
        if not user.is_active:
            logger.info("Authentication failed", reason="inactive", user_id=user.id)
            return None

        if needs_rehash(user.password):
            user.password = hash_password(password)
            self._commit("rehash password for", {})
            logger.info("Password rehashed", user_id=user.id)

        return user

    def ensure_admin(self, username: str, password: str, email: str | None = None) -> User | None:
        """
        Create an admin account unless the username is already taken.

        Returns the new user, or None when it already existed.
        """
        if self.users.find_by_username(username) is not None:
            return None

        self.create(
            {
                "username": username,
                "password": password,
                "email": email,
                "role": Roles.ADMIN,
                "is_active": True,
            }
        )
        return self.users.find_by_username(username)

    # =========================================================================
    # Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        existing = self.users.find_conflicting(data["username"], data.get("email"))
        if existing is None:
            return
        if existing.username == data["username"]:
            raise DuplicateEntityError("User", data["username"])
        raise DuplicateEntityError("User with email", data.get("email"))

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data = dict(data)
        data["password"] = hash_password(data["password"])
        return data

    def _validate_delete(self, entity: User, actor: Principal | None) -> None:
        if actor is not None and actor.user_id == entity.id:
            raise ValidationError("Cannot delete your own account", user_id=entity.id)

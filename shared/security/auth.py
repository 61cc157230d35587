"""
Session-based authentication and declarative role guards.

Usage:
    from shared.security.auth import Principal, current_principal, require_admin, require_staff

    @router.get("/api/users")
    def list_users(principal: Principal = Depends(require_admin)):
        ...
"""

from dataclasses import dataclass
from typing import Any, Callable

import redis
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from shared.config.constants import ADMIN_ROLES, MANAGEMENT_ROLES, Roles
from shared.config.logging import audit_auth_event, get_logger
from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.sessions import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionStore,
    unsign_session_id,
)
from shared.utils.exceptions import InsufficientRoleError, UnauthorizedError

logger = get_logger(__name__)


# =============================================================================
# Principal
# =============================================================================


@dataclass(frozen=True)
class Principal:
    """Authenticated identity bound to a session."""

    user_id: str
    role: str
    session_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Roles.ADMIN

    def to_session(self) -> dict[str, Any]:
        """Payload written to the session store."""
        return {"userId": self.user_id, "userRole": self.role}

    @classmethod
    def from_session(cls, data: dict[str, Any], session_id: str | None = None) -> "Principal | None":
        """Build a principal from stored session data, or None if it has no user."""
        user_id = data.get("userId")
        role = data.get("userRole")
        if not user_id or role not in Roles.ALL:
            return None
        return cls(user_id=str(user_id), role=role, session_id=session_id)


# =============================================================================
# Session store selection
# =============================================================================

_memory_store = InMemorySessionStore()
_redis_store: RedisSessionStore | None = None


def get_memory_session_store() -> InMemorySessionStore:
    """Process-wide in-memory store."""
    return _memory_store


def get_redis_session_store() -> RedisSessionStore:
    """Lazily connect the Redis-backed store."""
    global _redis_store
    if _redis_store is None:
        client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
        _redis_store = RedisSessionStore(client)
    return _redis_store


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    """
    FastAPI dependency returning the configured session store.

    SESSION_BACKEND=database (default) uses the request's DB session, so the
    store shares the request's transaction scope.
    """
    backend = settings.session_backend
    if backend == "memory":
        return get_memory_session_store()
    if backend == "redis":
        return get_redis_session_store()

    # Imported here: the table model lives in the REST API package
    from rest_api.services.session_store import DatabaseSessionStore
    return DatabaseSessionStore(db)


# =============================================================================
# Principal dependencies
# =============================================================================


def get_session_id(request: Request) -> str | None:
    """Session id carried by the signed session cookie, if valid."""
    return unsign_session_id(request.cookies.get(settings.session_cookie_name))


def current_principal_optional(
    request: Request,
    store: SessionStore = Depends(get_session_store),
    db: Session = Depends(get_db),
) -> Principal | None:
    """
    Principal for the current request, or None when not logged in.

    The session only names the user; the account is re-read on every request
    so deleted or deactivated users lose access immediately and role changes
    apply to live sessions.
    """
    sid = get_session_id(request)
    if sid is None:
        return None

    data = store.get(sid)
    if not data:
        return None

    principal = Principal.from_session(data, session_id=sid)
    if principal is None:
        return None

    # Imported here: the table model lives in the REST API package
    from rest_api.models import User
    user = db.get(User, principal.user_id)
    if user is None or not user.is_active:
        audit_auth_event(
            "SESSION_REVOKED",
            user_id=principal.user_id,
            success=False,
            reason="user deleted" if user is None else "user inactive",
        )
        store.destroy(sid)
        return None

    if user.role != principal.role:
        principal = Principal(user_id=user.id, role=user.role, session_id=sid)
    return principal


def current_principal(
    principal: Principal | None = Depends(current_principal_optional),
) -> Principal:
    """
    Require an authenticated session.

    Raises:
        UnauthorizedError: If no principal is bound to the request.
    """
    if principal is None:
        raise UnauthorizedError("Not authenticated")
    return principal


def require_roles(*allowed: str) -> Callable[..., Principal]:
    """
    Build a dependency that admits only principals holding one of `allowed`.

    Missing session -> 401, wrong role -> 403.
    """
    allowed_roles = frozenset(allowed)

    def dependency(
        request: Request,
        principal: Principal = Depends(current_principal),
    ) -> Principal:
        if principal.role not in allowed_roles:
            audit_auth_event(
                "ACCESS_DENIED",
                user_id=principal.user_id,
                success=False,
                reason=f"role '{principal.role}' not in {sorted(allowed_roles)}",
                path=request.url.path,
            )
            raise InsufficientRoleError(allowed_roles, user_id=principal.user_id)
        return principal

    return dependency


# Guards applied by routers
require_admin = require_roles(*ADMIN_ROLES)
require_staff = require_roles(*MANAGEMENT_ROLES)

"""
Security module: Sessions, role guards, password hashing, rate limiting.
"""

from shared.security.auth import (
    Principal,
    get_session_store,
    current_principal,
    current_principal_optional,
    require_roles,
    require_admin,
    require_staff,
)
from shared.security.password import hash_password, verify_password, needs_rehash
from shared.security.sessions import (
    SessionStore,
    InMemorySessionStore,
    RedisSessionStore,
    new_session_id,
    sign_session_id,
    unsign_session_id,
)
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    # auth
    "Principal",
    "get_session_store",
    "current_principal",
    "current_principal_optional",
    "require_roles",
    "require_admin",
    "require_staff",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # sessions
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "new_session_id",
    "sign_session_id",
    "unsign_session_id",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
]

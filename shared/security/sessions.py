"""
Server-side session storage and signed session cookies.

The browser only ever holds "<session id>.<signature>"; the principal itself
lives in a SessionStore keyed by session id. Stores are interchangeable:

- DatabaseSessionStore (rest_api.services.session_store): the `sessions` table
- InMemorySessionStore: process-local, for development and tests
- RedisSessionStore: SETEX-backed, shared between processes

Usage:
    store.set(sid, {"userId": user.id, "userRole": user.role}, ttl_seconds=86400)
    data = store.get(sid)
    store.destroy(sid)
"""

import hashlib
import hmac
import json
import secrets
import threading
import time
from typing import Any, Protocol, runtime_checkable

from shared.config.logging import get_logger, mask_session_id
from shared.config.settings import settings

logger = get_logger(__name__)

SESSION_KEY_PREFIX = "session:"
SIGNATURE_LENGTH = 32


# =============================================================================
# Store abstraction
# =============================================================================


@runtime_checkable
class SessionStore(Protocol):
    """Keyed storage for session data with expiry."""

    def get(self, sid: str) -> dict[str, Any] | None:
        """Return session data, or None when absent or expired."""
        ...

    def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        """Create or overwrite a session. Last write wins."""
        ...

    def destroy(self, sid: str) -> None:
        """Remove a session. Destroying an unknown session is not an error."""
        ...


class InMemorySessionStore:
    """Process-local session store with lazy expiry."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._data: dict[str, tuple[dict[str, Any], float]] = {}
        self._lock = threading.Lock()

    def get(self, sid: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._data.get(sid)
            if entry is None:
                return None
            data, expires_at = entry
            if expires_at <= self._clock():
                del self._data[sid]
                return None
            return dict(data)

    def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        with self._lock:
            self._data[sid] = (dict(data), self._clock() + ttl_seconds)

    def destroy(self, sid: str) -> None:
        with self._lock:
            self._data.pop(sid, None)

    def purge_expired(self) -> int:
        """Drop expired sessions. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [sid for sid, (_, expires_at) in self._data.items() if expires_at <= now]
            for sid in expired:
                del self._data[sid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._data)


class RedisSessionStore:
    """
    Redis-backed session store.

    Values are JSON documents under "session:<sid>" with a Redis TTL, so expiry
    is enforced by Redis itself.
    """

    def __init__(self, client):
        self._client = client

    def _key(self, sid: str) -> str:
        return f"{SESSION_KEY_PREFIX}{sid}"

    def get(self, sid: str) -> dict[str, Any] | None:
        raw = self._client.get(self._key(sid))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding corrupt session payload", sid=mask_session_id(sid))
            self._client.delete(self._key(sid))
            return None

    def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        self._client.setex(self._key(sid), ttl_seconds, json.dumps(data))

    def destroy(self, sid: str) -> None:
        self._client.delete(self._key(sid))


# =============================================================================
# Session ids and cookie signing
# =============================================================================


def new_session_id() -> str:
    """Generate an unguessable session id."""
    return secrets.token_urlsafe(32)


def _signature(sid: str, secret: str) -> str:
    return hmac.new(secret.encode(), sid.encode(), hashlib.sha256).hexdigest()[:SIGNATURE_LENGTH]


def sign_session_id(sid: str, secret: str | None = None) -> str:
    """Return the cookie value for a session id."""
    secret = secret or settings.session_secret
    return f"{sid}.{_signature(sid, secret)}"


def unsign_session_id(value: str | None, secret: str | None = None) -> str | None:
    """
    Verify a cookie value and return the session id it carries.

    Returns None for missing, malformed or tampered values.
    """
    if not value:
        return None

    sid, sep, signature = value.rpartition(".")
    if not sep or not sid or not signature:
        return None

    secret = secret or settings.session_secret
    if not hmac.compare_digest(signature, _signature(sid, secret)):
        logger.warning("Rejected session cookie with invalid signature", sid=mask_session_id(sid))
        return None

    return sid

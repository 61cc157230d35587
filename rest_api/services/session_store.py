"""
Database-backed session store over the `sessions` table.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import delete
from sqlalchemy.orm import Session

from rest_api.models import HttpSession
from shared.config.logging import get_logger, mask_session_id
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class DatabaseSessionStore:
    """
    SessionStore implementation persisting one row per session.

    Expired rows are ignored on read and removed lazily; `purge_expired`
    clears them in bulk (see `cli.py purge-sessions`).
    """

    def __init__(self, db: Session, clock=_utcnow):
        self._db = db
        self._clock = clock

    def get(self, sid: str) -> dict[str, Any] | None:
        row = self._db.get(HttpSession, sid)
        if row is None:
            return None
        if _as_aware(row.expire) <= self._clock():
            self._db.delete(row)
            safe_commit(self._db)
            return None
        return dict(row.sess)

    def set(self, sid: str, data: dict[str, Any], ttl_seconds: int) -> None:
        expire = self._clock() + timedelta(seconds=ttl_seconds)
        row = self._db.get(HttpSession, sid)
        if row is None:
            self._db.add(HttpSession(sid=sid, sess=dict(data), expire=expire))
        else:
            row.sess = dict(data)
            row.expire = expire
        safe_commit(self._db)

    def destroy(self, sid: str) -> None:
        row = self._db.get(HttpSession, sid)
        if row is None:
            return
        self._db.delete(row)
        safe_commit(self._db)

    def purge_expired(self) -> int:
        """Delete expired sessions. Returns how many were removed."""
        result = self._db.execute(delete(HttpSession).where(HttpSession.expire <= self._clock()))
        safe_commit(self._db)
        removed = result.rowcount or 0
        if removed:
            logger.info("Purged expired sessions", count=removed)
        return removed

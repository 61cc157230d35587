"""
User Repository - Data access for back-office accounts.
"""

from sqlalchemy import Select, or_, select

from rest_api.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entities, ordered by creation time."""

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User).order_by(User.created_at, User.username)

    def find_by_username(self, username: str) -> User | None:
        return self._db.scalar(select(User).where(User.username == username))

    def find_conflicting(self, username: str, email: str | None) -> User | None:
        """Find a user that already holds the given username or email."""
        conditions = [User.username == username]
        if email:
            conditions.append(User.email == email)
        return self._db.scalar(select(User).where(or_(*conditions)).limit(1))

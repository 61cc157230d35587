"""
Setting Repository - Data access for the site key-value store.
"""

from sqlalchemy import Select, select

from rest_api.models import Setting
from .base import BaseRepository


class SettingRepository(BaseRepository[Setting]):
    """Repository for Setting entities, ordered by key."""

    @property
    def model(self) -> type[Setting]:
        return Setting

    def _base_query(self) -> Select:
        return select(Setting).order_by(Setting.key)

    def find_by_key(self, key: str) -> Setting | None:
        return self._db.scalar(select(Setting).where(Setting.key == key))

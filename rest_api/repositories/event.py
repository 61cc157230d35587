"""
Event Repository - Data access for events.
"""

from dataclasses import dataclass
from sqlalchemy import Select, select

from rest_api.models import Event
from .base import BaseRepository, RepositoryFilters


@dataclass
class EventFilters(RepositoryFilters):
    """Filters specific to events."""

    featured_only: bool = False


class EventRepository(BaseRepository[Event]):
    """Repository for Event entities, ordered by date ascending (soonest first)."""

    @property
    def model(self) -> type[Event]:
        return Event

    def _base_query(self) -> Select:
        return select(Event).order_by(Event.date_time.asc(), Event.title)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, EventFilters):
            filters = EventFilters(**filters.__dict__)

        if filters.featured_only:
            query = query.where(Event.is_featured.is_(True))

        if filters.search:
            query = query.where(Event.title.ilike(f"%{filters.search}%"))

        return query

"""
Reservation Repository - Data access for reservations.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from sqlalchemy import Select, select

from rest_api.models import Reservation
from .base import BaseRepository, RepositoryFilters


@dataclass
class ReservationFilters(RepositoryFilters):
    """Filters specific to reservations."""

    status: str | None = None
    # Calendar day: keeps reservations with date_time in [day, day + 1)
    day: date | None = None


class ReservationRepository(BaseRepository[Reservation]):
    """Repository for Reservation entities, newest date first."""

    @property
    def model(self) -> type[Reservation]:
        return Reservation

    def _base_query(self) -> Select:
        return select(Reservation).order_by(Reservation.date_time.desc(), Reservation.full_name)

    def _apply_filters(self, query: Select, filters: RepositoryFilters) -> Select:
        if not isinstance(filters, ReservationFilters):
            filters = ReservationFilters(**filters.__dict__)

        if filters.status:
            query = query.where(Reservation.status == filters.status)

        if filters.day:
            start = datetime.combine(filters.day, time.min)
            end = start + timedelta(days=1)
            query = query.where(Reservation.date_time >= start, Reservation.date_time < end)

        return query

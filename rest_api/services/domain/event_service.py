"""
Event Service - game nights and special events.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from rest_api.models import Event
from rest_api.repositories import EventRepository
from rest_api.services.base_service import BaseCRUDService
from shared.utils.admin_schemas import EventOutput


class EventService(BaseCRUDService[Event, EventOutput]):
    """Service for event management."""

    REQUIRED_ON_UPDATE = ("title", "date_time", "sport_type", "is_featured")

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Event,
            output_schema=EventOutput,
            entity_name="Event",
            repository=EventRepository(db),
            audit_target="event",
        )

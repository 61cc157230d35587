"""
Event endpoints (game nights, watch parties, specials).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import Principal, require_staff
from shared.utils.admin_schemas import EventCreate, EventOutput, EventUpdate
from shared.utils.schemas import SuccessResponse
from rest_api.repositories import EventFilters
from rest_api.services.domain import EventService


router = APIRouter(prefix="/events", tags=["events"])

TRUTHY = {"1", "true", "yes"}


def _get_service(db: Session) -> EventService:
    return EventService(db)


@router.get("", response_model=list[EventOutput])
def list_events(
    featured: str | None = None,
    db: Session = Depends(get_db),
) -> list[EventOutput]:
    """Events in chronological order. `featured=1` keeps only featured events."""
    featured_only = featured is not None and featured.strip().lower() in TRUTHY
    return _get_service(db).list_all(EventFilters(featured_only=featured_only))


@router.get("/{event_id}", response_model=EventOutput)
def get_event(event_id: str, db: Session = Depends(get_db)) -> EventOutput:
    return _get_service(db).get_by_id(event_id)


@router.post("", response_model=EventOutput)
def create_event(
    body: EventCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> EventOutput:
    return _get_service(db).create(body.model_dump(), actor=principal)


@router.patch("/{event_id}", response_model=EventOutput)
def update_event(
    event_id: str,
    body: EventUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> EventOutput:
    return _get_service(db).update(event_id, body.model_dump(exclude_unset=True), actor=principal)


@router.delete("/{event_id}", response_model=SuccessResponse)
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> SuccessResponse:
    _get_service(db).delete(event_id, actor=principal)
    return SuccessResponse()

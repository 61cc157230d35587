"""
Reservation endpoints.

Anyone can request a table; staff review, confirm, cancel and delete.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.config.constants import ReservationStatus
from shared.infrastructure.db import get_db
from shared.security.auth import Principal, require_staff
from shared.utils.admin_schemas import ReservationCreate, ReservationOutput, ReservationUpdate
from shared.utils.exceptions import ValidationError
from shared.utils.schemas import SuccessResponse
from shared.utils.validators import parse_date
from rest_api.repositories import ReservationFilters
from rest_api.services.domain import ReservationService


router = APIRouter(prefix="/reservations", tags=["reservations"])


def _get_service(db: Session) -> ReservationService:
    return ReservationService(db)


@router.post("", response_model=ReservationOutput)
def create_reservation(
    body: ReservationCreate,
    db: Session = Depends(get_db),
) -> ReservationOutput:
    """Public reservation request. Always created as pending."""
    return _get_service(db).create(body.model_dump())


@router.get("", response_model=list[ReservationOutput])
def list_reservations(
    status: str | None = None,
    day: str | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> list[ReservationOutput]:
    """
    Reservations, latest first.

    Query params:
        status: pending | confirmed | cancelled
        date: YYYY-MM-DD, keeps reservations on that calendar day
    """
    if status and status not in ReservationStatus.ALL:
        raise ValidationError(f"Invalid status: {status}", field="status")

    parsed_day = None
    if day:
        try:
            parsed_day = parse_date(day)
        except ValueError:
            raise ValidationError("Invalid date format, expected YYYY-MM-DD", field="date")

    return _get_service(db).list_all(ReservationFilters(status=status or None, day=parsed_day))


@router.patch("/{reservation_id}", response_model=ReservationOutput)
def update_reservation(
    reservation_id: str,
    body: ReservationUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> ReservationOutput:
    """Partial update: typically the status, but any field may change."""
    return _get_service(db).update(
        reservation_id, body.model_dump(exclude_unset=True), actor=principal
    )


@router.delete("/{reservation_id}", response_model=SuccessResponse)
def delete_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_staff),
) -> SuccessResponse:
    _get_service(db).delete(reservation_id, actor=principal)
    return SuccessResponse()

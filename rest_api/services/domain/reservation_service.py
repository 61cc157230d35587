"""
Reservation Service.

Business rules:
- New reservations always start as pending
- Staff may move a reservation to any status (no state machine)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import Reservation
from rest_api.repositories import ReservationRepository
from rest_api.services.base_service import BaseCRUDService
from shared.config.constants import ReservationStatus
from shared.config.logging import get_logger, mask_email
from shared.security.auth import Principal
from shared.utils.admin_schemas import ReservationOutput

logger = get_logger(__name__)


class ReservationService(BaseCRUDService[Reservation, ReservationOutput]):
    """Service for reservation management."""

    REQUIRED_ON_UPDATE = ("full_name", "email", "phone", "date_time", "people", "status")

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Reservation,
            output_schema=ReservationOutput,
            entity_name="Reservation",
            repository=ReservationRepository(db),
            audit_target="reservation",
        )

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        return {**data, "status": ReservationStatus.PENDING}

    def _after_create(self, entity: Reservation, actor: Principal | None) -> None:
        logger.info(
            "Reservation requested",
            reservation_id=entity.id,
            email=mask_email(entity.email),
            people=entity.people,
            date_time=entity.date_time,
        )

    def _after_update(
        self,
        entity: Reservation,
        old_values: dict[str, Any],
        actor: Principal | None,
    ) -> None:
        if "status" in old_values and old_values["status"] != entity.status:
            logger.info(
                "Reservation status changed",
                reservation_id=entity.id,
                old_status=old_values["status"],
                new_status=entity.status,
            )

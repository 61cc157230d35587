"""
Reservation Model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import ReservationStatus

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Reservation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    Table reservation submitted from the public site.
    Status is pending on creation; staff may set it to any other status.
    """

    __tablename__ = "reservations"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    people: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReservationStatus.PENDING
    )

    __table_args__ = (
        CheckConstraint("people >= 1", name="ck_reservations_people_positive"),
        Index("ix_reservations_date_time", "date_time"),
        Index("ix_reservations_status", "status"),
    )

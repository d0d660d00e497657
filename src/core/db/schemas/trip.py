"""SQLAlchemy ORM model for the trips table."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, Float, ForeignKey, Index, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db.schemas.base import Base, UTCDateTime, utcnow
from core.models.enums import AvailabilityType, CapacityClass, TripStatus, sql_in

if TYPE_CHECKING:
    from core.db.schemas.trip_request import TripRequest
    from core.db.schemas.user import User


class Trip(Base):
    __tablename__ = "trips"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    departure_city: Mapped[str] = mapped_column(String(100), nullable=False)
    departure_lat: Mapped[float | None] = mapped_column(Float)
    departure_lng: Mapped[float | None] = mapped_column(Float)
    arrival_city: Mapped[str] = mapped_column(String(100), nullable=False)
    arrival_lat: Mapped[float | None] = mapped_column(Float)
    arrival_lng: Mapped[float | None] = mapped_column(Float)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    availability_type: Mapped[str] = mapped_column(String(20), nullable=False, default=AvailabilityType.BOTH.value)
    capacity: Mapped[str] = mapped_column(String(20), nullable=False, default=CapacityClass.MEDIUM.value)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=TripStatus.ACTIVE.value)
    photo: Mapped[str | None] = mapped_column(String(500))
    created_at: Mapped[dt.datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    owner: Mapped["User"] = relationship()
    requests: Mapped[list["TripRequest"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint(f"availability_type IN {sql_in(AvailabilityType)}", name="chk_trips_availability_type"),
        CheckConstraint(f"capacity IN {sql_in(CapacityClass)}", name="chk_trips_capacity"),
        CheckConstraint(f"status IN {sql_in(TripStatus)}", name="chk_trips_status"),
        Index("idx_trips_owner_id", "owner_id"),
        Index("idx_trips_status_date", "status", "date"),
    )

"""SQLAlchemy ORM model for the trip_requests table."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db.schemas.base import Base, UTCDateTime, utcnow
from core.models.enums import RequestStatus, sql_in

if TYPE_CHECKING:
    from core.db.schemas.conversation import Conversation
    from core.db.schemas.trip import Trip
    from core.db.schemas.user import User


class TripRequest(Base):
    __tablename__ = "trip_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False)
    requester_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    message: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=RequestStatus.PENDING.value)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    trip: Mapped["Trip"] = relationship(back_populates="requests")
    requester: Mapped["User"] = relationship()
    conversation: Mapped["Conversation | None"] = relationship(
        back_populates="trip_request", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        UniqueConstraint("trip_id", "requester_id", name="uq_trip_requests_trip_requester"),
        CheckConstraint(f"status IN {sql_in(RequestStatus)}", name="chk_trip_requests_status"),
        Index("idx_trip_requests_requester_id", "requester_id"),
    )

"""SQLAlchemy ORM model for the conversations table."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db.schemas.base import Base, UTCDateTime, utcnow

if TYPE_CHECKING:
    from core.db.schemas.message import Message
    from core.db.schemas.trip_request import TripRequest
    from core.db.schemas.user import User


class Conversation(Base):
    __tablename__ = "conversations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # unique: at most one conversation per accepted request
    trip_request_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trip_requests.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    user1_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    user2_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    trip_request: Mapped["TripRequest"] = relationship(back_populates="conversation")
    user1: Mapped["User"] = relationship(foreign_keys=[user1_id])
    user2: Mapped["User"] = relationship(foreign_keys=[user2_id])
    messages: Mapped[list["Message"]] = relationship(
        back_populates="conversation", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        Index("idx_conversations_user1_id", "user1_id"),
        Index("idx_conversations_user2_id", "user2_id"),
    )

    def has_participant(self, user_id: int) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def other_participant_id(self, user_id: int) -> int:
        return self.user2_id if self.user1_id == user_id else self.user1_id

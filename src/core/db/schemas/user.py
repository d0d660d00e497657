"""SQLAlchemy ORM model for the users table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.db.schemas.base import Base, UTCDateTime, utcnow
from core.models.user import DEFAULT_PROFILE_IMAGE


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30))
    profile_image: Mapped[str | None] = mapped_column(String(500), default=DEFAULT_PROFILE_IMAGE)
    # Subject id issued by the identity provider; null for locally seeded users.
    auth_subject: Mapped[str | None] = mapped_column(String(255), unique=True)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    __table_args__ = (Index("idx_users_auth_subject", "auth_subject"),)

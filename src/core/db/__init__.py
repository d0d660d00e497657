"""
Database ORM models and stores for Tigo.

Importing this package registers all models on Base.metadata,
which Alembic needs for autogenerate.
"""

from core.db.schemas.base import Base
from core.db.schemas.conversation import Conversation
from core.db.schemas.message import Message
from core.db.schemas.notification import Notification
from core.db.schemas.trip import Trip
from core.db.schemas.trip_request import TripRequest
from core.db.schemas.user import User
from core.db.store import PostgresStore, SqliteStore, Store, create_store

__all__ = [
    "Base",
    "Conversation",
    "Message",
    "Notification",
    "PostgresStore",
    "SqliteStore",
    "Store",
    "Trip",
    "TripRequest",
    "User",
    "create_store",
]

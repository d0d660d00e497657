"""
Pydantic models for Tigo.
"""

from core.models.enums import (
    AvailabilityType,
    CapacityClass,
    Decision,
    NotificationType,
    RequestStatus,
    TripStatus,
)
from core.models.messaging import (
    ConversationDetail,
    ConversationRead,
    ConversationSummary,
    MessageCreate,
    MessageRead,
)
from core.models.notification import NotificationRead
from core.models.request import RequestDecision, RequestSubmission, TripRequestRead
from core.models.trip import TripCreate, TripDetail, TripFilters, TripRead, TripUpdate
from core.models.user import UserCreate, UserRead, UserSummary, UserUpdate

__all__ = [
    "AvailabilityType",
    "CapacityClass",
    "ConversationDetail",
    "ConversationRead",
    "ConversationSummary",
    "Decision",
    "MessageCreate",
    "MessageRead",
    "NotificationRead",
    "NotificationType",
    "RequestDecision",
    "RequestStatus",
    "RequestSubmission",
    "TripCreate",
    "TripDetail",
    "TripFilters",
    "TripRead",
    "TripRequestRead",
    "TripStatus",
    "TripUpdate",
    "UserCreate",
    "UserRead",
    "UserSummary",
    "UserUpdate",
]

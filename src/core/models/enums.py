"""Enumerations shared by the ORM schemas and the pydantic models."""

from enum import Enum


class AvailabilityType(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "pickup"
    BOTH = "both"


class CapacityClass(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class TripStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class RequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Decision(str, Enum):
    """The two terminal states an owner can move a pending request to."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    NEW_MESSAGE = "new_message"
    REQUEST_RECEIVED = "request_received"
    REQUEST_ACCEPTED = "request_accepted"
    REQUEST_REJECTED = "request_rejected"


def sql_in(enum_cls: type[Enum]) -> str:
    """Render the enum values as a SQL ``IN`` list for check constraints."""
    return "(" + ", ".join(f"'{member.value}'" for member in enum_cls) + ")"

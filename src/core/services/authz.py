"""Caller identity and ownership checks shared by the core services."""

from sqlalchemy.orm import Session

from core.db.schemas.conversation import Conversation
from core.db.schemas.trip import Trip
from core.errors import AuthenticationError, ErrorCode, ForbiddenError


def require_caller(caller_id: int | None) -> int:
    """Reject operations made without an authenticated identity."""
    if caller_id is None:
        raise AuthenticationError("No caller identity supplied", code=ErrorCode.AUTH_REQUIRED)
    return caller_id


def require_trip_owner(session: Session, trip_id: int, caller_id: int) -> Trip:
    """Return the trip if ``caller_id`` owns it.

    An absent trip is reported as Forbidden too, so callers cannot probe
    which trip ids exist.
    """
    trip = session.get(Trip, trip_id)
    if trip is None or trip.owner_id != caller_id:
        raise ForbiddenError(f"User {caller_id} does not own trip {trip_id}")
    return trip


def require_participant(session: Session, conversation_id: int, caller_id: int) -> Conversation:
    """Return the conversation if ``caller_id`` is one of its two participants."""
    conversation = session.get(Conversation, conversation_id)
    if conversation is None or not conversation.has_participant(caller_id):
        raise ForbiddenError(f"User {caller_id} is not a participant of conversation {conversation_id}")
    return conversation

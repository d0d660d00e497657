"""Post-commit notification events.

Core operations collect ``NotificationEvent`` values while they run and hand
them to ``deliver`` only after their own transaction has committed. Delivery
writes each event to the notification feed in a separate transaction and
never lets a failure escape to the triggering operation.
"""

import logging

from pydantic import BaseModel

from core.db.store import Store
from core.models.enums import Decision, NotificationType
from core.services import notifications

logger = logging.getLogger(__name__)

MESSAGES_LINK = "/messages"


class NotificationEvent(BaseModel):
    type: NotificationType
    user_id: int
    title: str
    message: str
    link: str | None = None


def route_summary(departure_city: str, arrival_city: str) -> str:
    return f"{departure_city} → {arrival_city}"


def preview(content: str, length: int = 50) -> str:
    """First ``length`` characters of ``content``, with an ellipsis when cut."""
    if len(content) > length:
        return content[:length] + "..."
    return content


def request_received(
    owner_id: int, requester_name: str, trip_id: int, departure_city: str, arrival_city: str
) -> NotificationEvent:
    return NotificationEvent(
        type=NotificationType.REQUEST_RECEIVED,
        user_id=owner_id,
        title="New trip request",
        message=f"{requester_name} would like to join your trip {route_summary(departure_city, arrival_city)}",
        link=f"/trips/{trip_id}",
    )


def request_decided(
    requester_id: int, owner_name: str, decision: Decision, departure_city: str, arrival_city: str
) -> NotificationEvent:
    route = route_summary(departure_city, arrival_city)
    if decision is Decision.ACCEPTED:
        return NotificationEvent(
            type=NotificationType.REQUEST_ACCEPTED,
            user_id=requester_id,
            title="Request accepted!",
            message=f"{owner_name} accepted your request for the trip {route}",
            link=MESSAGES_LINK,
        )
    return NotificationEvent(
        type=NotificationType.REQUEST_REJECTED,
        user_id=requester_id,
        title="Request declined",
        message=f"{owner_name} declined your request for the trip {route}",
        link=MESSAGES_LINK,
    )


def new_message(
    recipient_id: int, sender_name: str, content: str, conversation_id: int, preview_length: int = 50
) -> NotificationEvent:
    return NotificationEvent(
        type=NotificationType.NEW_MESSAGE,
        user_id=recipient_id,
        title="New message",
        message=f"{sender_name}: {preview(content, preview_length)}",
        link=f"{MESSAGES_LINK}/{conversation_id}",
    )


def deliver(store: Store, events: list[NotificationEvent]) -> int:
    """Write each event to its recipient's feed. Returns how many were stored."""
    delivered = 0
    for evt in events:
        try:
            with store.session() as session:
                notifications.emit(session, evt.user_id, evt.type, evt.title, evt.message, evt.link)
                session.commit()
            delivered += 1
        except Exception:
            logger.exception("Failed to deliver %s notification to user %s", evt.type.value, evt.user_id)
    return delivered

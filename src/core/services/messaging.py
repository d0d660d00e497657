"""Two-party conversations spawned by accepted trip requests."""

import logging

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import joinedload

from core.db.schemas.conversation import Conversation
from core.db.schemas.message import Message
from core.db.schemas.trip_request import TripRequest
from core.db.schemas.user import User
from core.db.store import Store
from core.errors import ErrorCode, InvalidArgumentError
from core.models.messaging import ConversationDetail, ConversationRead, ConversationSummary, MessageRead
from core.models.user import UserSummary
from core.services import events
from core.services.authz import require_caller, require_participant

logger = logging.getLogger(__name__)


def list_conversations(store: Store, caller_id: int | None) -> list[ConversationSummary]:
    """The caller's conversations, most recent activity first.

    A conversation with no messages yet is placed by its creation time;
    remaining ties go to the higher id.
    """
    user_id = require_caller(caller_id)

    latest = (
        select(Message.content, Message.created_at)
        .where(Message.conversation_id == Conversation.id)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .limit(1)
        .correlate(Conversation)
    )
    last_message = latest.with_only_columns(Message.content).scalar_subquery()
    last_message_time = latest.with_only_columns(Message.created_at).scalar_subquery()
    unread = (
        select(func.count(Message.id))
        .where(
            Message.conversation_id == Conversation.id,
            Message.sender_id != user_id,
            Message.is_read.is_(False),
        )
        .correlate(Conversation)
        .scalar_subquery()
    )

    stmt = (
        select(
            Conversation,
            last_message.label("last_message"),
            last_message_time.label("last_message_time"),
            unread.label("unread_count"),
        )
        .options(
            joinedload(Conversation.user1),
            joinedload(Conversation.user2),
            joinedload(Conversation.trip_request).joinedload(TripRequest.trip),
        )
        .where(or_(Conversation.user1_id == user_id, Conversation.user2_id == user_id))
        .order_by(
            func.coalesce(last_message_time, Conversation.created_at).desc(),
            Conversation.id.desc(),
        )
    )

    with store.session() as session:
        summaries = []
        for conversation, last_content, last_time, unread_count in session.execute(stmt).all():
            other = conversation.user2 if conversation.user1_id == user_id else conversation.user1
            trip = conversation.trip_request.trip
            summaries.append(
                ConversationSummary(
                    **ConversationRead.model_validate(conversation).model_dump(),
                    request_status=conversation.trip_request.status,
                    departure_city=trip.departure_city,
                    arrival_city=trip.arrival_city,
                    trip_date=trip.date,
                    other_user=UserSummary.model_validate(other),
                    last_message=last_content,
                    last_message_time=last_time,
                    unread_count=unread_count or 0,
                )
            )
        return summaries


def open_conversation(store: Store, conversation_id: int, caller_id: int | None) -> ConversationDetail:
    """Full history, oldest first. Marks everything the other party sent as read."""
    user_id = require_caller(caller_id)
    with store.session() as session:
        conversation = require_participant(session, conversation_id, user_id)

        session.execute(
            update(Message)
            .where(
                Message.conversation_id == conversation_id,
                Message.sender_id != user_id,
                Message.is_read.is_(False),
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        session.commit()

        messages = session.scalars(
            select(Message)
            .options(joinedload(Message.sender))
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
            .execution_options(populate_existing=True)
        ).all()
        other = session.get(User, conversation.other_participant_id(user_id))
        return ConversationDetail(
            conversation=ConversationRead.model_validate(conversation),
            other_user=UserSummary.model_validate(other),
            messages=[MessageRead.model_validate(message) for message in messages],
        )


def send_message(store: Store, conversation_id: int, sender_id: int | None, content: str | None) -> MessageRead:
    user_id = require_caller(sender_id)
    text = (content or "").strip()
    if not text:
        raise InvalidArgumentError("Message content is required", code=ErrorCode.EMPTY_MESSAGE)

    with store.session() as session:
        conversation = require_participant(session, conversation_id, user_id)
        message = Message(conversation_id=conversation_id, sender_id=user_id, content=text, is_read=False)
        session.add(message)
        session.commit()

        sender = session.get(User, user_id)
        recipient_id = conversation.other_participant_id(user_id)
        logger.info("User %s sent message %s in conversation %s", user_id, message.id, conversation_id)
        pending = [
            events.new_message(
                recipient_id,
                sender.name if sender else "Someone",
                text,
                conversation_id,
                store.config.message_preview_length,
            )
        ]
        result = MessageRead.model_validate(message)

    events.deliver(store, pending)
    return result


def unread_message_count(store: Store, caller_id: int | None) -> int:
    """Unread messages from the other party, across all of the caller's conversations."""
    user_id = require_caller(caller_id)
    with store.session() as session:
        return session.scalar(
            select(func.count(Message.id))
            .join(Conversation, Message.conversation_id == Conversation.id)
            .where(
                or_(Conversation.user1_id == user_id, Conversation.user2_id == user_id),
                Message.sender_id != user_id,
                Message.is_read.is_(False),
            )
        ) or 0

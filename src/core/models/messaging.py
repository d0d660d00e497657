from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from core.models.enums import RequestStatus
from core.models.user import UserSummary


class MessageCreate(BaseModel):
    # Blank content is rejected by the service with a dedicated error code.
    content: str = ""


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    conversation_id: int
    sender_id: int
    content: str
    is_read: bool
    created_at: datetime
    sender: UserSummary | None = None


class ConversationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    trip_request_id: int
    user1_id: int
    user2_id: int
    created_at: datetime


class ConversationSummary(ConversationRead):
    request_status: RequestStatus
    departure_city: str
    arrival_city: str
    trip_date: date
    other_user: UserSummary
    last_message: str | None = None
    last_message_time: datetime | None = None
    unread_count: int = 0


class ConversationDetail(BaseModel):
    conversation: ConversationRead
    other_user: UserSummary
    messages: list[MessageRead]

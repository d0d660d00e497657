from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from core.models.enums import Decision, RequestStatus
from core.models.user import UserSummary


class RequestSubmission(BaseModel):
    message: str | None = Field(default=None, max_length=1000)


class RequestDecision(BaseModel):
    status: Decision


class TripRequestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    trip_id: int
    requester_id: int
    message: str | None = None
    status: RequestStatus
    created_at: datetime
    requester: UserSummary | None = None

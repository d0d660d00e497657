import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.enums import AvailabilityType, CapacityClass, RequestStatus, TripStatus
from core.models.user import UserSummary


class TripCreate(BaseModel):
    departure_city: str = Field(..., min_length=1, max_length=100)
    departure_lat: float | None = Field(default=None, ge=-90, le=90)
    departure_lng: float | None = Field(default=None, ge=-180, le=180)
    arrival_city: str = Field(..., min_length=1, max_length=100)
    arrival_lat: float | None = Field(default=None, ge=-90, le=90)
    arrival_lng: float | None = Field(default=None, ge=-180, le=180)
    date: dt.date
    time: dt.time
    description: str | None = None
    availability_type: AvailabilityType = AvailabilityType.BOTH
    capacity: CapacityClass = CapacityClass.MEDIUM
    photo: str | None = None


class TripUpdate(BaseModel):
    """Partial update; only fields explicitly set are written."""

    departure_city: str | None = Field(default=None, min_length=1, max_length=100)
    arrival_city: str | None = Field(default=None, min_length=1, max_length=100)
    date: dt.date | None = None
    time: dt.time | None = None
    description: str | None = None
    availability_type: AvailabilityType | None = None
    capacity: CapacityClass | None = None
    status: TripStatus | None = None
    photo: str | None = None


class TripFilters(BaseModel):
    departure: str | None = None
    arrival: str | None = None
    date: dt.date | None = None
    type: str | None = None
    capacity: CapacityClass | None = None

    @field_validator("type")
    @classmethod
    def type_is_known(cls, value: str | None) -> str | None:
        if value is None or value == "all":
            return value
        return AvailabilityType(value).value


class TripRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    departure_city: str
    departure_lat: float | None = None
    departure_lng: float | None = None
    arrival_city: str
    arrival_lat: float | None = None
    arrival_lng: float | None = None
    date: dt.date
    time: dt.time
    description: str | None = None
    availability_type: AvailabilityType
    capacity: CapacityClass
    status: TripStatus
    photo: str | None = None
    created_at: dt.datetime
    owner: UserSummary | None = None


class TripDetail(BaseModel):
    trip: TripRead
    has_requested: bool = False
    request_status: RequestStatus | None = None

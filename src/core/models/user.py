from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PROFILE_IMAGE = "/assets/images/default-avatar.svg"


class UserCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    profile_image: str | None = None
    auth_subject: str | None = None


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    profile_image: str | None = None


class UserSummary(BaseModel):
    """The slice of a user shown next to trips, requests and messages."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    profile_image: str | None = None


class UserRead(UserSummary):
    email: str
    phone: str | None = None
    created_at: datetime

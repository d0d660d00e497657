"""Trip catalog: postings, search, and owner-only edits."""

import datetime as dt
import logging
from enum import Enum

from sqlalchemy import func, or_, select
from sqlalchemy.orm import joinedload

from core.db.schemas.trip import Trip
from core.db.schemas.trip_request import TripRequest
from core.db.schemas.user import User
from core.db.store import Store
from core.errors import ErrorCode, NotFoundError
from core.models.enums import AvailabilityType, TripStatus
from core.models.trip import TripCreate, TripDetail, TripFilters, TripRead, TripUpdate
from core.services.authz import require_caller, require_trip_owner

logger = logging.getLogger(__name__)

CALENDAR_START = dt.date(2000, 1, 1)
CALENDAR_END = dt.date(2100, 12, 31)

_NULLABLE_FIELDS = {"description", "photo"}


def create_trip(store: Store, owner_id: int | None, payload: TripCreate) -> TripRead:
    owner = require_caller(owner_id)
    with store.session() as session:
        if session.get(User, owner) is None:
            raise NotFoundError(f"User {owner} not found", code=ErrorCode.USER_NOT_FOUND)
        data = payload.model_dump()
        data["availability_type"] = payload.availability_type.value
        data["capacity"] = payload.capacity.value
        trip = Trip(owner_id=owner, status=TripStatus.ACTIVE.value, **data)
        session.add(trip)
        session.commit()
        logger.info("User %s created trip %s", owner, trip.id)
        return TripRead.model_validate(trip)


def get_trip(store: Store, trip_id: int, caller_id: int | None = None) -> TripDetail:
    """Trip with owner identity; for a signed-in caller, their own request state too."""
    with store.session() as session:
        trip = session.scalar(select(Trip).options(joinedload(Trip.owner)).where(Trip.id == trip_id))
        if trip is None:
            raise NotFoundError(f"Trip {trip_id} not found", code=ErrorCode.TRIP_NOT_FOUND)
        status = None
        if caller_id is not None:
            status = session.scalar(
                select(TripRequest.status).where(
                    TripRequest.trip_id == trip_id, TripRequest.requester_id == caller_id
                )
            )
        return TripDetail(
            trip=TripRead.model_validate(trip),
            has_requested=status is not None,
            request_status=status,
        )


def search_trips(store: Store, filters: TripFilters) -> list[TripRead]:
    stmt = (
        select(Trip)
        .options(joinedload(Trip.owner))
        .where(Trip.status == TripStatus.ACTIVE.value)
    )
    if filters.departure:
        stmt = stmt.where(func.lower(Trip.departure_city).contains(filters.departure.lower(), autoescape=True))
    if filters.arrival:
        stmt = stmt.where(func.lower(Trip.arrival_city).contains(filters.arrival.lower(), autoescape=True))
    if filters.date:
        stmt = stmt.where(Trip.date == filters.date)
    if filters.type and filters.type != "all":
        stmt = stmt.where(
            or_(Trip.availability_type == filters.type, Trip.availability_type == AvailabilityType.BOTH.value)
        )
    if filters.capacity:
        stmt = stmt.where(Trip.capacity == filters.capacity.value)
    stmt = stmt.order_by(Trip.date.asc(), Trip.time.asc(), Trip.id.asc())

    with store.session() as session:
        return [TripRead.model_validate(trip) for trip in session.scalars(stmt).all()]


def calendar_trips(store: Store, start: dt.date | None = None, end: dt.date | None = None) -> list[TripRead]:
    stmt = (
        select(Trip)
        .options(joinedload(Trip.owner))
        .where(
            Trip.status == TripStatus.ACTIVE.value,
            Trip.date.between(start or CALENDAR_START, end or CALENDAR_END),
        )
        .order_by(Trip.date.asc(), Trip.time.asc(), Trip.id.asc())
    )
    with store.session() as session:
        return [TripRead.model_validate(trip) for trip in session.scalars(stmt).all()]


def list_my_trips(store: Store, caller_id: int | None) -> list[TripRead]:
    owner = require_caller(caller_id)
    with store.session() as session:
        trips = session.scalars(
            select(Trip)
            .options(joinedload(Trip.owner))
            .where(Trip.owner_id == owner)
            .order_by(Trip.date.desc(), Trip.id.desc())
        ).all()
        return [TripRead.model_validate(trip) for trip in trips]


def update_trip(store: Store, trip_id: int, caller_id: int | None, payload: TripUpdate) -> TripRead:
    caller = require_caller(caller_id)
    with store.session() as session:
        trip = require_trip_owner(session, trip_id, caller)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is None and key not in _NULLABLE_FIELDS:
                continue
            setattr(trip, key, value.value if isinstance(value, Enum) else value)
        session.commit()
        return TripRead.model_validate(trip)


def delete_trip(store: Store, trip_id: int, caller_id: int | None) -> None:
    """Delete a trip; its requests, conversations and messages cascade."""
    caller = require_caller(caller_id)
    with store.session() as session:
        trip = require_trip_owner(session, trip_id, caller)
        session.delete(trip)
        session.commit()
        logger.info("User %s deleted trip %s", caller, trip_id)

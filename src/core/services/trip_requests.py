"""Trip request lifecycle: submit, list, accept or reject.

State machine per request::

    pending -> accepted   (conversation created in the same transaction)
    pending -> rejected   (terminal, no conversation)

The pending -> decided step is a conditional UPDATE on ``status = 'pending'``,
so of several concurrent responders exactly one wins and only that one
creates the conversation.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from core.db.schemas.conversation import Conversation
from core.db.schemas.trip import Trip
from core.db.schemas.trip_request import TripRequest
from core.db.schemas.user import User
from core.db.store import Store
from core.errors import (
    ConflictError,
    ErrorCode,
    ForbiddenError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
)
from core.models.enums import Decision, RequestStatus
from core.models.request import TripRequestRead
from core.services import events
from core.services.authz import require_caller, require_trip_owner

logger = logging.getLogger(__name__)


def submit_request(
    store: Store, trip_id: int, requester_id: int | None, message: str | None = None
) -> TripRequestRead:
    requester_id = require_caller(requester_id)
    with store.session() as session:
        trip = session.get(Trip, trip_id)
        if trip is None:
            raise NotFoundError(f"Trip {trip_id} not found", code=ErrorCode.TRIP_NOT_FOUND)
        if trip.owner_id == requester_id:
            raise InvalidOperationError(
                f"User {requester_id} cannot request own trip {trip_id}", code=ErrorCode.OWN_TRIP_REQUEST
            )
        requester = session.get(User, requester_id)
        if requester is None:
            raise NotFoundError(f"User {requester_id} not found", code=ErrorCode.USER_NOT_FOUND)

        existing = session.scalar(
            select(TripRequest.id).where(TripRequest.trip_id == trip_id, TripRequest.requester_id == requester_id)
        )
        if existing is not None:
            raise _duplicate(trip_id, requester_id)

        trip_request = TripRequest(
            trip_id=trip_id,
            requester_id=requester_id,
            message=message or None,
            status=RequestStatus.PENDING.value,
        )
        session.add(trip_request)
        try:
            session.commit()
        except IntegrityError as e:
            # Lost the race against a concurrent identical submission.
            raise _duplicate(trip_id, requester_id) from e

        logger.info("User %s requested trip %s (request %s)", requester_id, trip_id, trip_request.id)
        pending = [
            events.request_received(trip.owner_id, requester.name, trip.id, trip.departure_city, trip.arrival_city)
        ]
        result = TripRequestRead.model_validate(trip_request)

    events.deliver(store, pending)
    return result


def list_requests_for_trip(store: Store, trip_id: int, caller_id: int | None) -> list[TripRequestRead]:
    """All requests on a trip, newest first. Owner only."""
    caller = require_caller(caller_id)
    with store.session() as session:
        require_trip_owner(session, trip_id, caller)
        rows = session.scalars(
            select(TripRequest)
            .options(joinedload(TripRequest.requester))
            .where(TripRequest.trip_id == trip_id)
            .order_by(TripRequest.created_at.desc(), TripRequest.id.desc())
        ).all()
        return [TripRequestRead.model_validate(row) for row in rows]


def respond_to_request(
    store: Store, request_id: int, caller_id: int | None, decision: Decision | str
) -> TripRequestRead:
    """Accept or reject a pending request as the trip owner.

    Raises NotFoundError for an unknown request, ForbiddenError when the
    caller does not own the trip, ConflictError when the request was already
    answered (including by a concurrent call that won the transition).
    """
    caller = require_caller(caller_id)
    try:
        decision = Decision(decision)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown decision {decision!r}") from e

    with store.session() as session:
        trip_request = session.scalar(
            select(TripRequest).options(joinedload(TripRequest.trip)).where(TripRequest.id == request_id)
        )
        if trip_request is None:
            raise NotFoundError(f"Request {request_id} not found", code=ErrorCode.REQUEST_NOT_FOUND)
        trip = trip_request.trip
        if trip.owner_id != caller:
            raise ForbiddenError(f"User {caller} does not own trip {trip.id} of request {request_id}")

        transitioned = session.execute(
            update(TripRequest)
            .where(TripRequest.id == request_id, TripRequest.status == RequestStatus.PENDING.value)
            .values(status=decision.value)
            .execution_options(synchronize_session=False)
        ).rowcount
        if transitioned != 1:
            raise ConflictError(
                f"Request {request_id} is no longer pending", code=ErrorCode.REQUEST_ALREADY_RESOLVED
            )

        if decision is Decision.ACCEPTED:
            session.add(
                Conversation(trip_request_id=request_id, user1_id=caller, user2_id=trip_request.requester_id)
            )
        try:
            session.commit()
        except IntegrityError as e:
            raise ConflictError(
                f"Request {request_id} already has a conversation", code=ErrorCode.REQUEST_ALREADY_RESOLVED
            ) from e

        session.refresh(trip_request)
        logger.info("User %s %s request %s", caller, decision.value, request_id)
        owner = session.get(User, caller)
        pending = [
            events.request_decided(
                trip_request.requester_id,
                owner.name if owner else "The driver",
                decision,
                trip.departure_city,
                trip.arrival_city,
            )
        ]
        result = TripRequestRead.model_validate(trip_request)

    events.deliver(store, pending)
    return result


def _duplicate(trip_id: int, requester_id: int) -> ConflictError:
    return ConflictError(
        f"User {requester_id} already requested trip {trip_id}", code=ErrorCode.DUPLICATE_REQUEST
    )

import datetime as dt

import pytest

from core.errors import ErrorCode, ForbiddenError, NotFoundError
from core.models.enums import AvailabilityType, CapacityClass, Decision, RequestStatus, TripStatus
from core.models.trip import TripFilters, TripUpdate
from core.services.trip_requests import respond_to_request, submit_request
from core.services.trips import (
    calendar_trips,
    delete_trip,
    get_trip,
    list_my_trips,
    search_trips,
    update_trip,
)


@pytest.fixture
def owner(make_user):
    return make_user("Marie Dupont")


def test_create_trip_defaults(owner, make_trip):
    trip = make_trip(owner.id)
    assert trip.status == TripStatus.ACTIVE
    assert trip.availability_type == AvailabilityType.BOTH
    assert trip.capacity == CapacityClass.MEDIUM
    assert trip.owner_id == owner.id


def test_create_trip_for_unknown_owner(store, make_trip):
    with pytest.raises(NotFoundError):
        make_trip(999)


def test_get_trip_anonymous(store, owner, make_trip):
    trip = make_trip(owner.id)
    detail = get_trip(store, trip.id)
    assert detail.trip.owner.name == "Marie Dupont"
    assert detail.has_requested is False
    assert detail.request_status is None


def test_get_trip_shows_callers_request_state(store, owner, make_user, make_trip):
    trip = make_trip(owner.id)
    requester = make_user("Thomas")
    created = submit_request(store, trip.id, requester.id)
    respond_to_request(store, created.id, owner.id, Decision.REJECTED)

    detail = get_trip(store, trip.id, requester.id)

    assert detail.has_requested is True
    assert detail.request_status == RequestStatus.REJECTED


def test_get_unknown_trip(store):
    with pytest.raises(NotFoundError) as exc_info:
        get_trip(store, 5)
    assert exc_info.value.code == ErrorCode.TRIP_NOT_FOUND


def test_search_filters(store, owner, make_trip):
    paris_lyon = make_trip(owner.id)
    make_trip(owner.id, departure_city="Marseille", arrival_city="Nice",
              availability_type="delivery", capacity="small")
    pickup = make_trip(owner.id, departure_city="Lyon", arrival_city="Grenoble",
                       availability_type="pickup", date=dt.date(2025, 12, 18))

    assert [t.id for t in search_trips(store, TripFilters(departure="par"))] == [paris_lyon.id]
    assert [t.id for t in search_trips(store, TripFilters(arrival="GRENO"))] == [pickup.id]
    assert [t.id for t in search_trips(store, TripFilters(date=dt.date(2025, 12, 18)))] == [pickup.id]
    assert {t.id for t in search_trips(store, TripFilters(type="pickup"))} == {paris_lyon.id, pickup.id}
    assert len(search_trips(store, TripFilters(type="all"))) == 3
    assert search_trips(store, TripFilters(capacity="small"))[0].departure_city == "Marseille"


def test_search_escapes_like_wildcards(store, owner, make_trip):
    make_trip(owner.id)
    assert search_trips(store, TripFilters(departure="%")) == []


def test_search_hides_inactive_trips(store, owner, make_trip):
    trip = make_trip(owner.id)
    update_trip(store, trip.id, owner.id, TripUpdate(status="inactive"))
    assert search_trips(store, TripFilters()) == []


def test_search_ordered_by_date_then_time(store, owner, make_trip):
    late = make_trip(owner.id, time=dt.time(18, 0))
    early = make_trip(owner.id, time=dt.time(6, 0))
    tomorrow = make_trip(owner.id, date=dt.date(2025, 12, 16), time=dt.time(1, 0))
    assert [t.id for t in search_trips(store, TripFilters())] == [early.id, late.id, tomorrow.id]


def test_unknown_type_filter_rejected():
    with pytest.raises(ValueError):
        TripFilters(type="teleport")


def test_calendar_range(store, owner, make_trip):
    make_trip(owner.id, date=dt.date(2025, 12, 1))
    inside = make_trip(owner.id, date=dt.date(2025, 12, 15))
    make_trip(owner.id, date=dt.date(2026, 1, 10))

    found = calendar_trips(store, dt.date(2025, 12, 10), dt.date(2025, 12, 31))

    assert [t.id for t in found] == [inside.id]
    assert len(calendar_trips(store)) == 3


def test_list_my_trips(store, owner, make_user, make_trip):
    mine = make_trip(owner.id)
    make_trip(make_user("Other").id)
    assert [t.id for t in list_my_trips(store, owner.id)] == [mine.id]


def test_update_trip_by_owner(store, owner, make_trip):
    trip = make_trip(owner.id, description="old")

    updated = update_trip(store, trip.id, owner.id, TripUpdate(arrival_city="Nice", description=None))

    assert updated.arrival_city == "Nice"
    assert updated.departure_city == "Paris"
    assert updated.description is None


def test_update_trip_by_stranger_forbidden(store, owner, make_user, make_trip):
    trip = make_trip(owner.id)
    with pytest.raises(ForbiddenError):
        update_trip(store, trip.id, make_user("Eve").id, TripUpdate(arrival_city="Nice"))


def test_update_unknown_trip_forbidden(store, owner):
    with pytest.raises(ForbiddenError):
        update_trip(store, 321, owner.id, TripUpdate(arrival_city="Nice"))


def test_delete_trip(store, owner, make_user, make_trip):
    trip = make_trip(owner.id)
    submit_request(store, trip.id, make_user("Thomas").id)

    with pytest.raises(ForbiddenError):
        delete_trip(store, trip.id, make_user("Eve").id)

    delete_trip(store, trip.id, owner.id)
    with pytest.raises(NotFoundError):
        get_trip(store, trip.id)

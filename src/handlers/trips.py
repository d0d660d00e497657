"""Trip catalog endpoints."""

import datetime as dt
from typing import Any

from core.clients import get_store
from core.errors import ValidationError
from core.models.trip import TripCreate, TripFilters, TripUpdate
from core.services import trips

from handlers._api import api_handler, authenticate, json_response, parse_body, parse_query, path_int, query_params


@api_handler
def search(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /trips?departure=&arrival=&date=&type=&capacity="""
    filters = parse_query(event, TripFilters)
    return json_response(200, {"trips": trips.search_trips(get_store(), filters)})


@api_handler
def calendar(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /trips/calendar?start=&end="""
    params = query_params(event)
    try:
        start = dt.date.fromisoformat(params["start"]) if params.get("start") else None
        end = dt.date.fromisoformat(params["end"]) if params.get("end") else None
    except ValueError as e:
        raise ValidationError(f"Invalid calendar range: {e}") from e
    return json_response(200, {"trips": trips.calendar_trips(get_store(), start, end)})


@api_handler
def get(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /trips/{tripId}; signed-in callers also see their own request state."""
    caller_id = authenticate(event, required=False)
    return json_response(200, trips.get_trip(get_store(), path_int(event, "tripId"), caller_id))


@api_handler
def mine(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /trips/user/my-trips"""
    caller_id = authenticate(event)
    return json_response(200, {"trips": trips.list_my_trips(get_store(), caller_id)})


@api_handler
def create(event: dict[str, Any], context: object) -> dict[str, Any]:
    """POST /trips"""
    caller_id = authenticate(event)
    payload = parse_body(event, TripCreate)
    return json_response(201, {"trip": trips.create_trip(get_store(), caller_id, payload)})


@api_handler
def update(event: dict[str, Any], context: object) -> dict[str, Any]:
    """PUT /trips/{tripId}"""
    caller_id = authenticate(event)
    payload = parse_body(event, TripUpdate)
    return json_response(200, {"trip": trips.update_trip(get_store(), path_int(event, "tripId"), caller_id, payload)})


@api_handler
def delete(event: dict[str, Any], context: object) -> dict[str, Any]:
    """DELETE /trips/{tripId}"""
    caller_id = authenticate(event)
    trips.delete_trip(get_store(), path_int(event, "tripId"), caller_id)
    return json_response(200, {"message": "Trip deleted"})

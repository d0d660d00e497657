"""Trip request endpoints: submit, list for a trip, accept/reject."""

from typing import Any

from core.clients import get_store
from core.models.request import RequestDecision, RequestSubmission
from core.services import trip_requests

from handlers._api import api_handler, authenticate, json_response, parse_body, path_int


@api_handler
def submit(event: dict[str, Any], context: object) -> dict[str, Any]:
    """POST /trips/{tripId}/requests"""
    caller_id = authenticate(event)
    payload = parse_body(event, RequestSubmission)
    created = trip_requests.submit_request(get_store(), path_int(event, "tripId"), caller_id, payload.message)
    return json_response(201, {"request": created})


@api_handler
def list_for_trip(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /trips/{tripId}/requests"""
    caller_id = authenticate(event)
    requests = trip_requests.list_requests_for_trip(get_store(), path_int(event, "tripId"), caller_id)
    return json_response(200, {"requests": requests})


@api_handler
def respond(event: dict[str, Any], context: object) -> dict[str, Any]:
    """PUT /requests/{requestId}/respond"""
    caller_id = authenticate(event)
    payload = parse_body(event, RequestDecision)
    updated = trip_requests.respond_to_request(get_store(), path_int(event, "requestId"), caller_id, payload.status)
    return json_response(200, {"request": updated})

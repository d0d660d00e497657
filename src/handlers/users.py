"""User directory endpoints for the signed-in caller."""

from typing import Any

from core.clients import get_store
from core.models.user import UserUpdate
from core.services import users

from handlers._api import api_handler, authenticate, json_response, parse_body, path_int


@api_handler
def me(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /auth/me"""
    caller_id = authenticate(event)
    return json_response(200, {"user": users.get_user(get_store(), caller_id)})


@api_handler
def profile(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /users/{userId}"""
    return json_response(200, {"user": users.get_user(get_store(), path_int(event, "userId"))})


@api_handler
def update_me(event: dict[str, Any], context: object) -> dict[str, Any]:
    """PUT /auth/profile"""
    caller_id = authenticate(event)
    payload = parse_body(event, UserUpdate)
    return json_response(200, {"user": users.update_profile(get_store(), caller_id, caller_id, payload)})


@api_handler
def delete_me(event: dict[str, Any], context: object) -> dict[str, Any]:
    """DELETE /auth/account"""
    caller_id = authenticate(event)
    users.delete_user(get_store(), caller_id, caller_id)
    return json_response(200, {"message": "Account deleted"})

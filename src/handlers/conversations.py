"""Conversation endpoints. Clients poll these; there is no push channel."""

from typing import Any

from core.clients import get_store
from core.models.messaging import MessageCreate
from core.services import messaging

from handlers._api import api_handler, authenticate, json_response, parse_body, path_int


@api_handler
def list_conversations(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /conversations"""
    caller_id = authenticate(event)
    return json_response(200, {"conversations": messaging.list_conversations(get_store(), caller_id)})


@api_handler
def open_conversation(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /conversations/{conversationId}/messages"""
    caller_id = authenticate(event)
    detail = messaging.open_conversation(get_store(), path_int(event, "conversationId"), caller_id)
    return json_response(200, detail)


@api_handler
def send_message(event: dict[str, Any], context: object) -> dict[str, Any]:
    """POST /conversations/{conversationId}/messages"""
    caller_id = authenticate(event)
    payload = parse_body(event, MessageCreate)
    message = messaging.send_message(get_store(), path_int(event, "conversationId"), caller_id, payload.content)
    return json_response(201, {"message": message})


@api_handler
def unread_count(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /messages/unread-count"""
    caller_id = authenticate(event)
    return json_response(200, {"count": messaging.unread_message_count(get_store(), caller_id)})

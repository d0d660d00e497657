"""Notification feed endpoints."""

from typing import Any

from core.clients import get_store
from core.config import get_config
from core.services import notifications

from handlers._api import api_handler, authenticate, json_response, path_int


@api_handler
def list_notifications(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /notifications"""
    caller_id = authenticate(event)
    feed = notifications.list_notifications(get_store(), caller_id, limit=get_config().notification_feed_limit)
    return json_response(200, {"notifications": feed})


@api_handler
def unread_count(event: dict[str, Any], context: object) -> dict[str, Any]:
    """GET /notifications/unread-count"""
    caller_id = authenticate(event)
    return json_response(200, {"count": notifications.unread_count(get_store(), caller_id)})


@api_handler
def mark_read(event: dict[str, Any], context: object) -> dict[str, Any]:
    """PUT /notifications/{notificationId}/read"""
    caller_id = authenticate(event)
    notifications.mark_read(get_store(), path_int(event, "notificationId"), caller_id)
    return json_response(200, {"message": "Notification marked as read"})


@api_handler
def mark_all_read(event: dict[str, Any], context: object) -> dict[str, Any]:
    """PUT /notifications/read-all"""
    caller_id = authenticate(event)
    updated = notifications.mark_all_read(get_store(), caller_id)
    return json_response(200, {"message": "All notifications marked as read", "updated": updated})


@api_handler
def delete(event: dict[str, Any], context: object) -> dict[str, Any]:
    """DELETE /notifications/{notificationId}"""
    caller_id = authenticate(event)
    notifications.delete_notification(get_store(), path_int(event, "notificationId"), caller_id)
    return json_response(200, {"message": "Notification deleted"})

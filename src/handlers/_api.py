"""Shared plumbing for the API Gateway proxy handlers.

Handlers stay thin: authenticate, parse, call one core service, serialize.
Every ``TigoError`` becomes a JSON error with its client-safe message; any
other exception is logged in full and returned as an opaque 500.
"""

import asyncio
import base64
import json
import logging
from collections.abc import Callable
from functools import lru_cache, wraps
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from core.auth import get_auth_provider
from core.clients import get_store
from core.config import get_config
from core.errors import USER_MESSAGES, AuthenticationError, ErrorCode, TigoError, ValidationError
from core.services.users import resolve_caller

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
Handler = Callable[[dict[str, Any], Any], dict[str, Any]]

HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.AUTH_REQUIRED: 401,
    ErrorCode.AUTH_FAILED: 401,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.TRIP_NOT_FOUND: 404,
    ErrorCode.REQUEST_NOT_FOUND: 404,
    ErrorCode.USER_NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.DUPLICATE_REQUEST: 409,
    ErrorCode.REQUEST_ALREADY_RESOLVED: 409,
    ErrorCode.EMAIL_TAKEN: 409,
    ErrorCode.INVALID_OPERATION: 400,
    ErrorCode.OWN_TRIP_REQUEST: 400,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.EMPTY_MESSAGE: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.STORE_UNAVAILABLE: 503,
    ErrorCode.INTERNAL_ERROR: 500,
}


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    logging.getLogger().setLevel(get_config().log_level.upper())


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def json_response(status_code: int, body: Any = None) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": "" if body is None else json.dumps(_jsonable(body)),
    }


def error_response(exc: TigoError) -> dict[str, Any]:
    return json_response(
        HTTP_STATUS.get(exc.code, 500),
        {"error": {"code": exc.code.value, "message": exc.user_message}},
    )


def _internal_error_response() -> dict[str, Any]:
    return json_response(
        500,
        {"error": {"code": ErrorCode.INTERNAL_ERROR.value, "message": USER_MESSAGES[ErrorCode.INTERNAL_ERROR]}},
    )


def bearer_token(event: dict[str, Any]) -> str | None:
    headers = event.get("headers") or {}
    for key, value in headers.items():
        if key.lower() == "authorization" and value:
            scheme, _, token = value.partition(" ")
            if scheme.lower() == "bearer" and token:
                return token.strip()
    return None


def authenticate(event: dict[str, Any], required: bool = True) -> int | None:
    """Resolve the caller's directory id from the Bearer token."""
    token = bearer_token(event)
    if token is None:
        if required:
            raise AuthenticationError("Missing bearer token", code=ErrorCode.AUTH_REQUIRED)
        return None
    provider = get_auth_provider()
    # AuthProvider methods are async; the handlers are sync Lambda entry points.
    try:
        auth_user = asyncio.run(provider.verify_token(token))
    except AuthenticationError as e:
        logger.info("Rejected token for subject %s: %s", _unverified_subject(provider, token), e.code.value)
        raise
    return resolve_caller(get_store(), auth_user)


def _unverified_subject(provider: Any, token: str) -> object:
    """The token's ``sub`` claim, read without signature checks. For logging only."""
    try:
        return asyncio.run(provider.decode_claims(token)).get("sub")
    except AuthenticationError:
        return None


def path_int(event: dict[str, Any], name: str) -> int:
    raw = (event.get("pathParameters") or {}).get(name)
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Path parameter {name}={raw!r} is not an integer") from e


def query_params(event: dict[str, Any]) -> dict[str, str]:
    return dict(event.get("queryStringParameters") or {})


def parse_body(event: dict[str, Any], model: type[M]) -> M:
    raw = event.get("body") or ""
    if raw and event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    try:
        data = json.loads(raw) if raw else {}
        return model.model_validate(data)
    except (json.JSONDecodeError, pydantic.ValidationError) as e:
        raise ValidationError(f"Invalid {model.__name__} payload: {e}") from e


def parse_query(event: dict[str, Any], model: type[M]) -> M:
    try:
        return model.model_validate(query_params(event))
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid {model.__name__} query: {e}") from e


def api_handler(func: Handler) -> Handler:
    @wraps(func)
    def wrapper(event: dict[str, Any], context: Any) -> dict[str, Any]:
        _configure_logging()
        try:
            return func(event, context)
        except TigoError as e:
            log = logger.error if HTTP_STATUS.get(e.code, 500) >= 500 else logger.info
            log("%s rejected with %s: %s", func.__name__, e.code.value, e.message)
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", func.__name__)
            return _internal_error_response()

    return wrapper

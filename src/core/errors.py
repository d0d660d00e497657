"""
Custom exceptions and error handling for Tigo.

Defines application-specific exceptions with error codes for consistent
error handling across the core services and the Lambda handlers.

Usage:
    from core.errors import NotFoundError, ErrorCode

    raise NotFoundError("Trip 42 does not exist", code=ErrorCode.TRIP_NOT_FOUND)
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    # Authentication errors
    AUTH_REQUIRED = "AUTH_REQUIRED"
    AUTH_FAILED = "AUTH_FAILED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors
    FORBIDDEN = "FORBIDDEN"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"
    TRIP_NOT_FOUND = "TRIP_NOT_FOUND"
    REQUEST_NOT_FOUND = "REQUEST_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # State errors
    CONFLICT = "CONFLICT"
    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    REQUEST_ALREADY_RESOLVED = "REQUEST_ALREADY_RESOLVED"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    INVALID_OPERATION = "INVALID_OPERATION"
    OWN_TRIP_REQUEST = "OWN_TRIP_REQUEST"

    # Validation errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    EMPTY_MESSAGE = "EMPTY_MESSAGE"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # System errors
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.AUTH_REQUIRED: "Authentication required. Please sign in.",
    ErrorCode.AUTH_FAILED: "Authentication failed. Please sign in again.",
    ErrorCode.INVALID_TOKEN: "Your session has expired. Please sign in again.",
    ErrorCode.FORBIDDEN: "You are not allowed to perform this action.",
    ErrorCode.NOT_FOUND: "The requested resource was not found.",
    ErrorCode.TRIP_NOT_FOUND: "Trip not found.",
    ErrorCode.REQUEST_NOT_FOUND: "Trip request not found.",
    ErrorCode.USER_NOT_FOUND: "User not found.",
    ErrorCode.CONFLICT: "This action conflicts with the current state. Please refresh and try again.",
    ErrorCode.DUPLICATE_REQUEST: "You have already requested this trip.",
    ErrorCode.REQUEST_ALREADY_RESOLVED: "This request has already been answered.",
    ErrorCode.EMAIL_TAKEN: "This email address is already registered.",
    ErrorCode.INVALID_OPERATION: "This action is not allowed.",
    ErrorCode.OWN_TRIP_REQUEST: "You cannot request your own trip.",
    ErrorCode.INVALID_ARGUMENT: "Your request contains invalid information. Please check and try again.",
    ErrorCode.EMPTY_MESSAGE: "Message content is required.",
    ErrorCode.VALIDATION_ERROR: "Your request contains invalid information. Please check and try again.",
    ErrorCode.STORE_UNAVAILABLE: "The service is temporarily unavailable. Please try again later.",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again.",
}


class TigoError(Exception):
    """Base exception for all Tigo errors."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])


class AuthenticationError(TigoError):
    """No caller identity, or the identity could not be verified."""

    default_code = ErrorCode.AUTH_FAILED


class ForbiddenError(TigoError):
    """Caller is identified but lacks ownership or participant rights."""

    default_code = ErrorCode.FORBIDDEN


class NotFoundError(TigoError):
    """Trip, request, conversation or user is absent."""

    default_code = ErrorCode.NOT_FOUND


class ConflictError(TigoError):
    """Operation collides with existing state (duplicate, already resolved)."""

    default_code = ErrorCode.CONFLICT


class InvalidOperationError(TigoError):
    """Operation is never allowed for this caller, e.g. requesting one's own trip."""

    default_code = ErrorCode.INVALID_OPERATION


class InvalidArgumentError(TigoError):
    """An argument is present but unusable, e.g. blank message content."""

    default_code = ErrorCode.INVALID_ARGUMENT


class ValidationError(TigoError):
    """Input payload failed schema validation."""

    default_code = ErrorCode.VALIDATION_ERROR


class StoreError(TigoError):
    """The persistent store is unreachable or misconfigured."""

    default_code = ErrorCode.STORE_UNAVAILABLE

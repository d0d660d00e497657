from core.errors import (
    USER_MESSAGES,
    AuthenticationError,
    ConflictError,
    ErrorCode,
    ForbiddenError,
    InvalidArgumentError,
    InvalidOperationError,
    NotFoundError,
    StoreError,
    TigoError,
    ValidationError,
)


def test_all_error_codes_have_user_message():
    for code in ErrorCode:
        assert code in USER_MESSAGES


def test_user_message_lookup():
    err = TigoError("request 7 is no longer pending", code=ErrorCode.REQUEST_ALREADY_RESOLVED)
    assert err.user_message == "This request has already been answered."


def test_subclasses_have_default_codes():
    assert AuthenticationError("x").code == ErrorCode.AUTH_FAILED
    assert ForbiddenError("x").code == ErrorCode.FORBIDDEN
    assert NotFoundError("x").code == ErrorCode.NOT_FOUND
    assert ConflictError("x").code == ErrorCode.CONFLICT
    assert InvalidOperationError("x").code == ErrorCode.INVALID_OPERATION
    assert InvalidArgumentError("x").code == ErrorCode.INVALID_ARGUMENT
    assert ValidationError("x").code == ErrorCode.VALIDATION_ERROR
    assert StoreError("x").code == ErrorCode.STORE_UNAVAILABLE
    assert TigoError("x").code == ErrorCode.INTERNAL_ERROR


def test_explicit_code_overrides_default():
    err = NotFoundError("trip 3", code=ErrorCode.TRIP_NOT_FOUND)
    assert err.code == ErrorCode.TRIP_NOT_FOUND
    assert err.user_message == USER_MESSAGES[ErrorCode.TRIP_NOT_FOUND]


def test_subclasses_are_tigo_errors():
    for cls in (AuthenticationError, ForbiddenError, NotFoundError, ConflictError, StoreError):
        assert issubclass(cls, TigoError)


def test_user_message_never_exposes_internal_message():
    internal = "UPDATE trip_requests SET status='accepted' WHERE id = 12"
    err = ConflictError(internal, code=ErrorCode.REQUEST_ALREADY_RESOLVED)
    assert internal not in err.user_message
    assert str(err) == internal

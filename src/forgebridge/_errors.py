from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Mapping

    from forgebridge._events import Event


class StatusReason(Enum):
    """A coarse classification of backend failures, independent of HTTP status."""

    UNKNOWN = ""
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    CONFLICT = "Conflict"
    GONE = "Gone"
    INVALID = "Invalid"
    SERVER_TIMEOUT = "ServerTimeout"
    TIMEOUT = "Timeout"
    TOO_MANY_REQUESTS = "TooManyRequests"
    BAD_REQUEST = "BadRequest"
    METHOD_NOT_ALLOWED = "MethodNotAllowed"
    NOT_ACCEPTABLE = "NotAcceptable"
    REQUEST_ENTITY_TOO_LARGE = "RequestEntityTooLarge"
    UNSUPPORTED_MEDIA_TYPE = "UnsupportedMediaType"
    INTERNAL_ERROR = "InternalError"
    EXPIRED = "Expired"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"


_REASONS_BY_STATUS = {
    400: StatusReason.BAD_REQUEST,
    401: StatusReason.UNAUTHORIZED,
    403: StatusReason.FORBIDDEN,
    404: StatusReason.NOT_FOUND,
    405: StatusReason.METHOD_NOT_ALLOWED,
    406: StatusReason.NOT_ACCEPTABLE,
    409: StatusReason.CONFLICT,
    410: StatusReason.GONE,
    413: StatusReason.REQUEST_ENTITY_TOO_LARGE,
    415: StatusReason.UNSUPPORTED_MEDIA_TYPE,
    429: StatusReason.TOO_MANY_REQUESTS,
    500: StatusReason.INTERNAL_ERROR,
    503: StatusReason.SERVICE_UNAVAILABLE,
    504: StatusReason.TIMEOUT,
}


class AuthIssueKind(Enum):
    MISSING = "missing"
    """A secret is expected, but neither a signature nor a body secret was sent."""
    MISMATCH = "mismatch"
    """The signature or body secret doesn't match the expected secret."""


class ForgeBridgeError(Exception):
    """Base class for all errors raised by forgebridge."""


class NotFoundError(ForgeBridgeError):
    """The requested resource doesn't exist."""

    def __init__(self, msg: str = "not found") -> None:
        super().__init__(msg)


class NotSupportedError(ForgeBridgeError):
    """The operation has no equivalent on the backend and was never sent."""

    def __init__(self, msg: str = "not supported") -> None:
        super().__init__(msg)


class NotAuthorizedError(ForgeBridgeError):
    """The operation requires credentials the client doesn't have."""

    def __init__(self, msg: str = "not authorized") -> None:
        super().__init__(msg)


class UnknownEventError(ForgeBridgeError):
    """The delivery doesn't describe an event kind the pipeline understands."""


class WebhookPayloadError(ForgeBridgeError):
    """The delivery body couldn't be decoded into its event shape."""


class InvalidSignatureError(ForgeBridgeError):
    def __init__(self, kind: AuthIssueKind) -> None:
        super().__init__(f"invalid webhook signature ({kind.value})")
        self.kind = kind


class APIError(ForgeBridgeError):
    """An error reported by the backend, carrying its message verbatim."""

    def __init__(
        self, message: str, status: int, reason: StatusReason | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.reason = reason or _REASONS_BY_STATUS.get(status, StatusReason.UNKNOWN)


class ForgeBridgeSetupError(ForgeBridgeError):
    """Exception for misuse of a router detected while registering hooks."""


class AuthIssue(NamedTuple):
    """An object representing a delivery rejected by signature verification."""

    kind: AuthIssueKind
    event: Event
    headers: Mapping[str, str]


class Error(NamedTuple):
    """An object representing an error reported while routing a delivery."""

    exc: Exception
    event_name: str | None
    headers: Mapping[str, str] | None


def reason_for_error(exc: BaseException) -> tuple[StatusReason, int]:
    """Return the status reason and HTTP status (0 if unknown) behind `exc`."""
    if isinstance(exc, APIError):
        return exc.reason, exc.status
    if isinstance(exc, NotFoundError):
        return StatusReason.NOT_FOUND, 0
    if isinstance(exc, NotAuthorizedError):
        return StatusReason.UNAUTHORIZED, 0
    return StatusReason.UNKNOWN, 0


def _matches(exc: BaseException, reason: StatusReason, status: int | None) -> bool:
    actual, code = reason_for_error(exc)
    if actual is reason:
        return True
    return (
        status is not None
        and actual is StatusReason.UNKNOWN
        and code == status
    )


def is_unauthorized(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.UNAUTHORIZED, 401)


def is_forbidden(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.FORBIDDEN, 403)


def is_not_found(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.NOT_FOUND, 404)


def is_already_exists(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.ALREADY_EXISTS, None)


def is_conflict(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.CONFLICT, 409)


def is_gone(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.GONE, 410)


def is_invalid(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.INVALID, 422)


def is_server_timeout(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.SERVER_TIMEOUT, None)


def is_timeout(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.TIMEOUT, 504)


def is_too_many_requests(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.TOO_MANY_REQUESTS, 429)


def is_bad_request(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.BAD_REQUEST, 400)


def is_method_not_supported(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.METHOD_NOT_ALLOWED, 405)


def is_not_acceptable(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.NOT_ACCEPTABLE, 406)


def is_request_entity_too_large(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.REQUEST_ENTITY_TOO_LARGE, 413)


def is_unsupported_media_type(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.UNSUPPORTED_MEDIA_TYPE, 415)


def is_internal_error(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.INTERNAL_ERROR, 500)


def is_expired(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.EXPIRED, None)


def is_service_unavailable(exc: BaseException) -> bool:
    return _matches(exc, StatusReason.SERVICE_UNAVAILABLE, 503)

from __future__ import annotations

import pytest

from forgebridge import (
    APIError,
    NotAuthorizedError,
    NotFoundError,
    NotSupportedError,
    StatusReason,
    is_already_exists,
    is_bad_request,
    is_conflict,
    is_expired,
    is_forbidden,
    is_gone,
    is_internal_error,
    is_invalid,
    is_method_not_supported,
    is_not_acceptable,
    is_not_found,
    is_request_entity_too_large,
    is_server_timeout,
    is_service_unavailable,
    is_timeout,
    is_too_many_requests,
    is_unauthorized,
    is_unsupported_media_type,
    reason_for_error,
)


@pytest.mark.parametrize(
    ("status", "check"),
    [
        (400, is_bad_request),
        (401, is_unauthorized),
        (403, is_forbidden),
        (404, is_not_found),
        (405, is_method_not_supported),
        (406, is_not_acceptable),
        (409, is_conflict),
        (410, is_gone),
        (413, is_request_entity_too_large),
        (415, is_unsupported_media_type),
        (422, is_invalid),
        (429, is_too_many_requests),
        (500, is_internal_error),
        (503, is_service_unavailable),
        (504, is_timeout),
    ],
)
def test_status_checks(status: int, check: object) -> None:
    exc = APIError("boom", status)
    assert check(exc)  # type: ignore[operator]
    assert not is_not_found(APIError("boom", 418))


@pytest.mark.parametrize(
    ("reason", "check"),
    [
        (StatusReason.ALREADY_EXISTS, is_already_exists),
        (StatusReason.SERVER_TIMEOUT, is_server_timeout),
        (StatusReason.EXPIRED, is_expired),
        (StatusReason.INVALID, is_invalid),
    ],
)
def test_reason_only_checks(reason: StatusReason, check: object) -> None:
    assert check(APIError("boom", 400, reason))  # type: ignore[operator]


def test_explicit_reason_wins_over_status() -> None:
    exc = APIError("duplicate", 409, StatusReason.ALREADY_EXISTS)
    assert is_already_exists(exc)
    assert not is_conflict(exc)


def test_unmapped_status_keeps_code() -> None:
    exc = APIError("unprocessable", 422)
    assert reason_for_error(exc) == (StatusReason.UNKNOWN, 422)
    assert is_invalid(exc)
    assert not is_bad_request(exc)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (NotFoundError(), (StatusReason.NOT_FOUND, 0)),
        (NotAuthorizedError(), (StatusReason.UNAUTHORIZED, 0)),
        (NotSupportedError(), (StatusReason.UNKNOWN, 0)),
        (ValueError("x"), (StatusReason.UNKNOWN, 0)),
    ],
)
def test_reason_for_error(exc: Exception, expected: tuple[StatusReason, int]) -> None:
    assert reason_for_error(exc) == expected


def test_sentinel_errors() -> None:
    assert is_not_found(NotFoundError())
    assert is_unauthorized(NotAuthorizedError())
    assert not is_not_found(NotSupportedError())
    assert str(NotSupportedError()) == "not supported"

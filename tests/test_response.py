from __future__ import annotations

import io

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from forgebridge import APIError, Page, Rate, StatusReason, is_not_found
from forgebridge._response import Response


class Thing(BaseModel):
    id: int
    name: str = ""


def make_response(
    status: int = 200,
    content: bytes = b"",
    headers: dict[str, str] | None = None,
) -> Response:
    return Response(httpx.Response(status, content=content, headers=headers))


@pytest.mark.asyncio
async def test_decode_model() -> None:
    res = make_response(content=b'{"id": 3, "name": "three"}')
    assert await res.decode(Thing) == Thing(id=3, name="three")


@pytest.mark.asyncio
async def test_decode_list() -> None:
    res = make_response(content=b'[{"id": 1}, {"id": 2}]')
    assert await res.decode(list[Thing]) == [Thing(id=1), Thing(id=2)]


@pytest.mark.asyncio
async def test_decode_without_destination() -> None:
    res = make_response(content=b"this is not json")
    assert await res.decode() is None


@pytest.mark.asyncio
async def test_decode_validation_error_propagates() -> None:
    res = make_response(content=b'{"name": "no id"}')
    with pytest.raises(ValidationError):
        await res.decode(Thing)


@pytest.mark.parametrize("status", [200, 201, 204, 300])
@pytest.mark.asyncio
async def test_success_statuses(status: int) -> None:
    assert await make_response(status).decode() is None


@pytest.mark.asyncio
async def test_error_envelope() -> None:
    res = make_response(404, b'{"message": "repository does not exist"}')
    with pytest.raises(APIError) as exc_info:
        await res.decode(Thing)

    err = exc_info.value
    assert err.message == "repository does not exist"
    assert str(err) == "repository does not exist"
    assert err.status == 404
    assert err.reason is StatusReason.NOT_FOUND
    assert is_not_found(err)


@pytest.mark.parametrize(
    ("status", "content", "message"),
    [
        (500, b"<html>oops</html>", "Internal Server Error"),
        (302, b"", "Found"),
        (400, b"{}", "Bad Request"),
        (422, b'{"message": 42}', "Unprocessable Entity"),
    ],
)
@pytest.mark.asyncio
async def test_error_falls_back_to_status_text(
    status: int, content: bytes, message: str
) -> None:
    with pytest.raises(APIError) as exc_info:
        await make_response(status, content).decode(Thing)
    assert exc_info.value.message == message
    assert exc_info.value.status == status


@pytest.mark.asyncio
async def test_error_is_raised_before_sink() -> None:
    sink = io.BytesIO()
    with pytest.raises(APIError):
        await make_response(500, b"boom").decode(sink=sink)
    assert sink.getvalue() == b""


@pytest.mark.asyncio
async def test_sink_receives_raw_body() -> None:
    sink = io.BytesIO()
    body = b"\x00\x01 not json at all"
    assert await make_response(content=body).decode(Thing, sink=sink) is None
    assert sink.getvalue() == body


@pytest.mark.asyncio
async def test_writer_as_destination() -> None:
    sink = io.BytesIO()
    await make_response(content=b"raw bytes").decode(sink)
    assert sink.getvalue() == b"raw bytes"


def test_page_and_rate() -> None:
    res = make_response(
        headers={
            "Link": '<https://forge.example.com/api/v1/user/repos?page=2>; rel="next"',
            "X-RateLimit-Limit": "5000",
            "X-RateLimit-Remaining": "4999",
            "X-RateLimit-Reset": "1700000000",
        }
    )
    assert res.page == Page(next=2)
    assert res.rate == Rate(5000, 4999, 1700000000)


def test_missing_or_bad_rate_headers() -> None:
    assert make_response().rate == Rate()
    assert make_response(headers={"X-RateLimit-Limit": "lots"}).rate == Rate()


@pytest.mark.asyncio
async def test_aclose() -> None:
    res = make_response(content=b"{}")
    await res.aclose()
    assert res.raw.is_closed

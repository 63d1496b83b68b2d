from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, TypeVar, final, overload

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from forgebridge._errors import APIError
from forgebridge._page import Page, parse_links

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")

LINK_HEADER = "link"
RATE_LIMIT_HEADER = "x-ratelimit-limit"
RATE_REMAINING_HEADER = "x-ratelimit-remaining"
RATE_RESET_HEADER = "x-ratelimit-reset"


class Writer(Protocol):
    def write(self, data: bytes, /) -> Any: ...


class Rate(NamedTuple):
    """A snapshot of the backend's rate limit."""

    limit: int = 0
    remaining: int = 0
    reset: int = 0

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> Self:
        def header_int(name: str) -> int:
            try:
                return int(headers.get(name, 0))
            except ValueError:
                return 0

        return cls(
            header_int(RATE_LIMIT_HEADER),
            header_int(RATE_REMAINING_HEADER),
            header_int(RATE_RESET_HEADER),
        )


class _ErrorEnvelope(BaseModel):
    message: str


@final
class Response:
    """
    A backend response whose body hasn't been consumed yet. `decode` reads it;
    `aclose` must be called once the caller is done with it.
    """

    def __init__(self, raw: httpx.Response) -> None:
        self._raw = raw
        self._page = parse_links(raw.headers.get(LINK_HEADER))
        self._rate = Rate.from_headers(raw.headers)

    @property
    def status(self) -> int:
        return self._raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self._raw.headers

    @property
    def page(self) -> Page:
        return self._page

    @property
    def rate(self) -> Rate:
        return self._rate

    @property
    def raw(self) -> httpx.Response:
        return self._raw

    @overload
    async def decode(self, into: None = None, *, sink: Writer | None = None) -> None: ...
    @overload
    async def decode(self, into: Writer, *, sink: None = None) -> None: ...
    @overload
    async def decode(self, into: type[T], *, sink: None = None) -> T: ...
    async def decode(self, into: Any = None, *, sink: Writer | None = None) -> Any:
        """
        Decode the body as JSON into `into` (anything pydantic can validate), or
        copy it verbatim to `sink` when given. A writer passed as `into` counts
        as a sink. Statuses above 300 raise `APIError`.
        """
        if self.status > 300:
            raise await self._error()

        if (
            sink is None
            and not isinstance(into, type)
            and callable(getattr(into, "write", None))
        ):
            sink = into
        if sink is not None:
            async for chunk in self._raw.aiter_bytes():
                sink.write(chunk)
            return None

        if into is None:
            return None
        return TypeAdapter(into).validate_json(await self._raw.aread())

    async def _error(self) -> APIError:
        body = await self._raw.aread()
        try:
            message = _ErrorEnvelope.model_validate_json(body).message
        except ValidationError:
            message = httpx.codes.get_reason_phrase(self.status)
        return APIError(message, self.status)

    async def aclose(self) -> None:
        await self._raw.aclose()

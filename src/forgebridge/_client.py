from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, NamedTuple, final

import httpx

from forgebridge._contents import Contents
from forgebridge._issues import Issues
from forgebridge._linker import Linker
from forgebridge._orgs import Organizations
from forgebridge._pulls import PullRequests
from forgebridge._releases import Releases
from forgebridge._repos import Repositories
from forgebridge._response import Rate, Response
from forgebridge._settings import ClientSettings
from forgebridge._users import Users

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from typing_extensions import Self

    from forgebridge._response import Writer

logger = logging.getLogger(__name__)


class Request(NamedTuple):
    """An outbound API request; `path` is resolved against the client's base URL."""

    method: str
    path: str
    headers: Mapping[str, str] | None = None
    body: bytes | None = None
    json: Any = None


@final
class Client:
    """
    An async client for the backend's REST API, rooted at `base_url` and
    optionally authenticated with `token`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        debug: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not base_url.endswith("/"):
            base_url = f"{base_url}/"
        self._base_url = httpx.URL(base_url)
        self._token = token
        self._debug = debug
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._rate_lock = threading.Lock()
        self._rate = Rate()
        self._linker = Linker(base_url)

        self.contents = Contents(self)
        self.issues = Issues(self)
        self.organizations = Organizations(self)
        self.pull_requests = PullRequests(self)
        self.releases = Releases(self)
        self.repositories = Repositories(self)
        self.users = Users(self)

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None) -> Self:
        settings = settings or ClientSettings()
        return cls(
            settings.base_url,
            token=settings.token,
            timeout=settings.timeout,
            debug=settings.debug,
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def linker(self) -> Linker:
        return self._linker

    @property
    def rate(self) -> Rate:
        """The rate limit reported by the most recent response."""
        with self._rate_lock:
            return self._rate

    def set_rate(self, rate: Rate) -> None:
        with self._rate_lock:
            self._rate = rate

    async def do(self, request: Request) -> Response:
        """
        Send `request` and return the response with its body still open. The
        caller is responsible for closing it with `Response.aclose`.
        """
        url = self._base_url.join(request.path)
        headers = dict(request.headers or {})
        if self._token:
            headers.setdefault("Authorization", f"token {self._token}")

        http_request = self._http.build_request(
            request.method,
            url,
            headers=headers,
            content=request.body,
            json=request.json,
        )
        raw = await self._http.send(http_request, stream=True)
        logger.debug("%s %s -> %d", request.method, url, raw.status_code)

        if self._debug:
            try:
                await raw.aread()
            except BaseException:
                await raw.aclose()
                raise
            logger.debug("response body for %s:\n%s", request.path, raw.text)

        response = Response(raw)
        self.set_rate(response.rate)
        return response

    async def call(
        self,
        method: str,
        path: str,
        payload: Any = None,
        *,
        into: Any = None,
        sink: Writer | None = None,
    ) -> tuple[Any, Response]:
        """
        Send `payload` (if any) as JSON, then decode the response into `into` or
        copy it to `sink`. The response body is always closed before returning.
        """
        response = await self.do(Request(method, path, json=payload))
        try:
            return await response.decode(into, sink=sink), response
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, NamedTuple, cast

from aiohttp import web

if TYPE_CHECKING:
    from multidict import CIMultiDict


class Canned(NamedTuple):
    status: int
    body: Any
    headers: dict[str, str]
    delay: float


class Recorded(NamedTuple):
    method: str
    path_qs: str
    headers: CIMultiDict[str]
    body: bytes


ROUTES_KEY = web.AppKey("routes", dict)
REQUESTS_KEY = web.AppKey("requests", list)


async def api_handler(request: web.Request) -> web.StreamResponse:
    request.app[REQUESTS_KEY].append(
        Recorded(
            request.method, request.path_qs, request.headers.copy(), await request.read()
        )
    )
    routes = request.app[ROUTES_KEY]
    canned: Canned | None = routes.get((request.method, request.path_qs)) or routes.get(
        (request.method, request.path)
    )
    if canned is None:
        return web.json_response({"message": "route not found"}, status=404)

    if canned.delay:
        await asyncio.sleep(canned.delay)
    if isinstance(canned.body, str):
        return web.Response(
            status=canned.status, text=canned.body, headers=canned.headers
        )
    if canned.body is None or isinstance(canned.body, bytes):
        return web.Response(
            status=canned.status, body=canned.body, headers=canned.headers
        )
    return web.json_response(canned.body, status=canned.status, headers=canned.headers)


async def start_test_server() -> tuple[web.Application, web.AppRunner, int]:
    app = web.Application()
    app[ROUTES_KEY] = {}
    app[REQUESTS_KEY] = []
    app.router.add_route("*", "/{tail:.*}", api_handler)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()

    _, port = cast("asyncio.Server", site._server).sockets[0].getsockname()
    return app, runner, port


class FakeForge:
    """Canned responses for the backend API, keyed by method and path."""

    def __init__(self, app: web.Application, url: str) -> None:
        self._app = app
        self.url = url

    def respond(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
        delay: float = 0,
    ) -> None:
        self._app[ROUTES_KEY][(method, path)] = Canned(
            status, body, headers or {}, delay
        )

    @property
    def requests(self) -> list[Recorded]:
        return self._app[REQUESTS_KEY]

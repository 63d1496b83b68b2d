from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from forgebridge import Client

from .api_server import FakeForge, start_test_server

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@pytest.fixture
async def forge() -> AsyncIterator[FakeForge]:
    app, runner, port = await start_test_server()
    yield FakeForge(app, f"http://127.0.0.1:{port}/")
    await runner.cleanup()


@pytest.fixture
async def client(forge: FakeForge) -> AsyncIterator[Client]:
    async with Client(forge.url, token="t0ken") as client:
        yield client

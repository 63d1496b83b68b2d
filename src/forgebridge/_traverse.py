from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from forgebridge._page import ListOptions

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from forgebridge._client import Client
    from forgebridge._response import Response
    from forgebridge._types import Repository

T = TypeVar("T")


async def collect(
    list_page: Callable[[ListOptions], Awaitable[tuple[Sequence[T | None], Response]]],
    *,
    size: int = 100,
) -> list[T]:
    """
    Call `list_page` until the backend stops reporting a next page, following
    either page numbers or continuation URLs, and return every item seen.
    """
    items: list[T] = []
    opts = ListOptions(size=size)
    while True:
        result, response = await list_page(opts)
        items.extend(item for item in result if item is not None)
        page = response.page
        if not page.next and not page.next_url:
            return items
        opts = opts._replace(page=page.next, url=page.next_url)


async def repos(client: Client) -> list[Repository]:
    """Return every repository visible to the client, across all pages."""
    return await collect(client.repositories.list)

from __future__ import annotations

import logging
from typing import NamedTuple
from urllib.parse import urlencode

import httpx

logger = logging.getLogger(__name__)

_RELS = {'rel="next"': "next", 'rel="prev"': "prev", 'rel="first"': "first", 'rel="last"': "last"}


class Page(NamedTuple):
    """
    Pagination pointers parsed from a list response. Page numbers are 0 when
    absent; `next_url` is set instead of `next` by cursor-paginated endpoints.
    """

    next: int = 0
    prev: int = 0
    first: int = 0
    last: int = 0
    next_url: str = ""


class ListOptions(NamedTuple):
    """Pagination parameters for list operations."""

    url: str = ""
    page: int = 0
    size: int = 0


def _atoi(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def parse_links(header: str | None) -> Page:
    """
    Parse a `Link` header (`<url>; rel="next", <url>; rel="last"`) into a
    `Page`. Malformed entries are skipped; this never raises.
    """
    fields: dict[str, int | str] = {}
    for link in (header or "").split(","):
        segments = link.strip().split(";")
        if len(segments) < 2:
            continue
        target = segments[0].strip()
        if not (target.startswith("<") and target.endswith(">")):
            continue
        try:
            url = httpx.URL(target[1:-1])
        except httpx.InvalidURL:
            logger.debug("skipping unparsable link %r", target)
            continue

        page = url.params.get("page")
        for segment in segments[1:]:
            if not (rel := _RELS.get(segment.strip())):
                continue
            if page is not None:
                fields[rel] = _atoi(page)
            elif rel == "next":
                fields["next_url"] = str(url)
    return Page(**fields)  # pyright: ignore[reportArgumentType]


def list_query(opts: ListOptions, **extra: str) -> str:
    """Encode `opts` (and `extra` parameters) as a query string, `?` included."""
    params: dict[str, str | int] = dict(extra)
    if opts.page:
        params["page"] = opts.page
    if opts.size:
        params["limit"] = opts.size
    return f"?{urlencode(params)}" if params else ""

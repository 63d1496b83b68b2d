from __future__ import annotations

from typing import TYPE_CHECKING

from forgebridge._errors import NotSupportedError
from forgebridge._page import ListOptions, list_query
from forgebridge._payload import Payload
from forgebridge._types import Organization

if TYPE_CHECKING:
    from forgebridge._client import Client
    from forgebridge._response import Response


class OrgPayload(Payload):
    username: str = ""
    avatar_url: str = ""


def convert_org(src: OrgPayload) -> Organization:
    return Organization(name=src.username, avatar=src.avatar_url)


class Organizations:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def find(self, name: str) -> tuple[Organization, Response]:
        out, res = await self._client.call("GET", f"api/v1/orgs/{name}", into=OrgPayload)
        return convert_org(out), res

    async def find_membership(self, name: str, username: str) -> None:
        raise NotSupportedError

    async def list(
        self, opts: ListOptions = ListOptions()
    ) -> tuple[list[Organization], Response]:
        path = opts.url or f"api/v1/user/orgs{list_query(opts)}"
        out, res = await self._client.call("GET", path, into=list[OrgPayload])
        return [convert_org(o) for o in out], res

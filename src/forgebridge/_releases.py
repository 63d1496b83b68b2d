from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from forgebridge._page import ListOptions, list_query
from forgebridge._payload import Payload
from forgebridge._types import Release, ReleaseInput

if TYPE_CHECKING:
    from forgebridge._client import Client
    from forgebridge._response import Response


class ReleasePayload(Payload):
    id: int = 0
    tag_name: str = ""
    target_commitish: str = ""
    name: str = ""
    body: str = ""
    url: str = ""
    html_url: str = ""
    draft: bool = False
    prerelease: bool = False
    created_at: datetime | None = None
    published_at: datetime | None = None


def convert_release(src: ReleasePayload) -> Release:
    return Release(
        id=src.id,
        title=src.name,
        description=src.body,
        link=src.html_url,
        tag=src.tag_name,
        commitish=src.target_commitish,
        draft=src.draft,
        prerelease=src.prerelease,
        created=src.created_at,
        published=src.published_at,
    )


def release_input_payload(src: ReleaseInput) -> dict[str, object]:
    return {
        "tag_name": src.tag,
        "target_commitish": src.commitish,
        "name": src.title,
        "body": src.description,
        "draft": src.draft,
        "prerelease": src.prerelease,
    }


class Releases:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def find(self, repo: str, release_id: int) -> tuple[Release, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}/releases/{release_id}", into=ReleasePayload
        )
        return convert_release(out), res

    async def find_by_tag(self, repo: str, tag: str) -> tuple[Release, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}/releases/tags/{tag}", into=ReleasePayload
        )
        return convert_release(out), res

    async def create(self, repo: str, release: ReleaseInput) -> tuple[Release, Response]:
        out, res = await self._client.call(
            "POST",
            f"api/v1/repos/{repo}/releases",
            release_input_payload(release),
            into=ReleasePayload,
        )
        return convert_release(out), res

    async def update(
        self, repo: str, release_id: int, release: ReleaseInput
    ) -> tuple[Release, Response]:
        out, res = await self._client.call(
            "PATCH",
            f"api/v1/repos/{repo}/releases/{release_id}",
            release_input_payload(release),
            into=ReleasePayload,
        )
        return convert_release(out), res

    async def update_by_tag(
        self, repo: str, tag: str, release: ReleaseInput
    ) -> tuple[Release, Response]:
        existing, _ = await self.find_by_tag(repo, tag)
        return await self.update(repo, existing.id, release)

    async def delete(self, repo: str, release_id: int) -> Response:
        _, res = await self._client.call(
            "DELETE", f"api/v1/repos/{repo}/releases/{release_id}"
        )
        return res

    async def delete_by_tag(self, repo: str, tag: str) -> Response:
        _, res = await self._client.call(
            "DELETE", f"api/v1/repos/{repo}/releases/tags/{tag}"
        )
        return res

    async def list(
        self, repo: str, opts: ListOptions = ListOptions()
    ) -> tuple[list[Release], Response]:
        path = opts.url or f"api/v1/repos/{repo}/releases{list_query(opts)}"
        out, res = await self._client.call("GET", path, into=list[ReleasePayload])
        return [convert_release(r) for r in out], res

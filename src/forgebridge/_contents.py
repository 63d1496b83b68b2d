from __future__ import annotations

import io
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from forgebridge._linker import trim_ref
from forgebridge._payload import Payload
from forgebridge._types import Content, ContentInfo, ContentKind

if TYPE_CHECKING:
    from forgebridge._client import Client
    from forgebridge._response import Response


class ContentPayload(Payload):
    path: str = ""
    type: str = ""
    sha: str = ""


_KINDS = {
    "file": ContentKind.FILE,
    "dir": ContentKind.DIRECTORY,
    "symlink": ContentKind.SYMLINK,
    "submodule": ContentKind.GITLINK,
}


def convert_content_info(src: ContentPayload) -> ContentInfo:
    return ContentInfo(
        path=src.path,
        sha=src.sha,
        kind=_KINDS.get(src.type, ContentKind.UNSUPPORTED),
    )


class Contents:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def find(self, repo: str, path: str, ref: str) -> tuple[Content, Response]:
        """Return the raw contents of `path` at `ref`, undecoded."""
        buf = io.BytesIO()
        _, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}/raw/{trim_ref(ref)}/{path}", sink=buf
        )
        return Content(path=path, data=buf.getvalue()), res

    async def list(
        self, repo: str, path: str, ref: str
    ) -> tuple[list[ContentInfo], Response]:
        """List the entries of the directory at `path`; the backend doesn't paginate it."""
        query = urlencode({"ref": ref})
        out, res = await self._client.call(
            "GET",
            f"api/v1/repos/{repo}/contents/{path}?{query}",
            into=list[ContentPayload],
        )
        return [convert_content_info(c) for c in out], res

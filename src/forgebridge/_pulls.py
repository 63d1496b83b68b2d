from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from forgebridge._page import ListOptions, list_query
from forgebridge._payload import Payload
from forgebridge._repos import RepositoryPayload
from forgebridge._types import PullRequest
from forgebridge._users import UserPayload, convert_user

if TYPE_CHECKING:
    from forgebridge._client import Client
    from forgebridge._response import Response


class BranchPayload(Payload):
    label: str = ""
    ref: str = ""
    sha: str = ""
    repo: RepositoryPayload = RepositoryPayload()


class PullRequestPayload(Payload):
    id: int = 0
    number: int = 0
    user: UserPayload = UserPayload()
    title: str = ""
    body: str = ""
    state: str = ""
    html_url: str = ""
    merged: bool = False
    head: BranchPayload = BranchPayload()
    base: BranchPayload = BranchPayload()
    created_at: datetime | None = None
    updated_at: datetime | None = None


def convert_pull_request(src: PullRequestPayload) -> PullRequest:
    return PullRequest(
        number=src.number,
        title=src.title,
        body=src.body,
        sha=src.head.sha,
        ref=f"refs/pull/{src.number}/head",
        source=src.head.ref,
        target=src.base.ref,
        fork=src.head.repo.full_name,
        link=src.html_url,
        closed=src.state == "closed",
        merged=src.merged,
        author=convert_user(src.user),
        created=src.created_at,
        updated=src.updated_at,
    )


class PullRequests:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def find(self, repo: str, number: int) -> tuple[PullRequest, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}/pulls/{number}", into=PullRequestPayload
        )
        return convert_pull_request(out), res

    async def merge(self, repo: str, number: int) -> Response:
        _, res = await self._client.call(
            "POST", f"api/v1/repos/{repo}/pulls/{number}/merge", {"Do": "merge"}
        )
        return res

    async def close(self, repo: str, number: int) -> Response:
        _, res = await self._client.call(
            "PATCH", f"api/v1/repos/{repo}/pulls/{number}", {"state": "closed"}
        )
        return res

    async def list(
        self, repo: str, opts: ListOptions = ListOptions()
    ) -> tuple[list[PullRequest], Response]:
        path = opts.url or f"api/v1/repos/{repo}/pulls{list_query(opts)}"
        out, res = await self._client.call("GET", path, into=list[PullRequestPayload])
        return [convert_pull_request(p) for p in out], res

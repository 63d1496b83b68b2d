from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import httpx
from pydantic import Field

from forgebridge._page import ListOptions, list_query
from forgebridge._payload import Payload
from forgebridge._types import (
    Hook,
    HookEvents,
    HookInput,
    Perm,
    Repository,
    State,
    Status,
    StatusInput,
)
from forgebridge._users import UserPayload

if TYPE_CHECKING:
    from forgebridge._client import Client
    from forgebridge._response import Response


class PermPayload(Payload):
    admin: bool = False
    push: bool = False
    pull: bool = False


class RepositoryPayload(Payload):
    id: int = 0
    owner: UserPayload = UserPayload()
    name: str = ""
    full_name: str = ""
    private: bool = False
    fork: bool = False
    html_url: str = ""
    ssh_url: str = ""
    clone_url: str = ""
    default_branch: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    permissions: PermPayload = PermPayload()
    archived: bool = False


class HookConfigPayload(Payload):
    url: str = ""
    content_type: str = ""
    secret: str = ""


class HookPayload(Payload):
    id: int = 0
    type: str = ""
    events: list[str] = Field(default_factory=list)
    active: bool = False
    config: HookConfigPayload = HookConfigPayload()


class StatusPayload(Payload):
    status: str = ""
    target_url: str = ""
    description: str = ""
    context: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


def convert_perm(src: PermPayload) -> Perm:
    return Perm(pull=src.pull, push=src.push, admin=src.admin)


def convert_repository(src: RepositoryPayload) -> Repository:
    return Repository(
        id=str(src.id),
        namespace=src.owner.effective_login,
        name=src.name,
        perm=convert_perm(src.permissions),
        branch=src.default_branch,
        archived=src.archived,
        private=src.private,
        clone=src.clone_url,
        clone_ssh=src.ssh_url,
        link=src.html_url,
        created=src.created_at,
        updated=src.updated_at,
    )


def convert_hook(src: HookPayload) -> Hook:
    return Hook(
        id=str(src.id),
        active=src.active,
        target=src.config.url,
        events=src.events,
    )


def convert_hook_events(src: HookEvents) -> list[str]:
    """Translate generic hook events into the backend's event names."""
    events: list[str] = []
    if src.pull_request:
        events.append("pull_request")
    if src.issue:
        events.append("issues")
    if src.issue_comment or src.pull_request_comment:
        events.append("issue_comment")
    if src.branch or src.tag:
        events.extend(("create", "delete"))
    if src.push:
        events.append("push")
    return events


def hook_payload(src: HookInput) -> dict[str, object]:
    # The target also carries the secret as its `secret` query parameter.
    target = httpx.URL(src.target).copy_set_param("secret", src.secret)
    return {
        "type": "gitea",
        "active": True,
        "events": [*convert_hook_events(src.events), *src.native_events],
        "config": {
            "url": str(target),
            "secret": src.secret,
            "content_type": "json",
        },
    }


_STATES = {
    "error": State.ERROR,
    "failure": State.FAILURE,
    "pending": State.PENDING,
    "success": State.SUCCESS,
}


def convert_state(src: str) -> State:
    return _STATES.get(src, State.UNKNOWN)


def convert_from_state(src: State) -> str:
    """Translate a `State` into the backend's vocabulary, which has no `running`."""
    if src in (State.PENDING, State.RUNNING):
        return "pending"
    if src is State.SUCCESS:
        return "success"
    if src is State.FAILURE:
        return "failure"
    return "error"


def convert_status(src: StatusPayload) -> Status:
    return Status(
        state=convert_state(src.status),
        label=src.context,
        desc=src.description,
        target=src.target_url,
    )


class Repositories:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def find(self, repo: str) -> tuple[Repository, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}", into=RepositoryPayload
        )
        return convert_repository(out), res

    async def find_perms(self, repo: str) -> tuple[Perm, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}", into=RepositoryPayload
        )
        return convert_perm(out.permissions), res

    async def list_hooks(
        self, repo: str, opts: ListOptions = ListOptions()
    ) -> tuple[list[Hook], Response]:
        path = opts.url or f"api/v1/repos/{repo}/hooks{list_query(opts)}"
        out, res = await self._client.call("GET", path, into=list[HookPayload])
        return [convert_hook(h) for h in out], res

    async def find_hook(self, repo: str, hook_id: str) -> tuple[Hook, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}/hooks/{hook_id}", into=HookPayload
        )
        return convert_hook(out), res

    async def create_hook(self, repo: str, hook: HookInput) -> tuple[Hook, Response]:
        out, res = await self._client.call(
            "POST", f"api/v1/repos/{repo}/hooks", hook_payload(hook), into=HookPayload
        )
        return convert_hook(out), res

    async def update_hook(
        self, repo: str, hook_id: str, hook: HookInput
    ) -> tuple[Hook, Response]:
        out, res = await self._client.call(
            "PATCH",
            f"api/v1/repos/{repo}/hooks/{hook_id}",
            hook_payload(hook),
            into=HookPayload,
        )
        return convert_hook(out), res

    async def delete_hook(self, repo: str, hook_id: str) -> Response:
        _, res = await self._client.call(
            "DELETE", f"api/v1/repos/{repo}/hooks/{hook_id}"
        )
        return res

    async def list_statuses(
        self, repo: str, ref: str, opts: ListOptions = ListOptions()
    ) -> tuple[list[Status], Response]:
        path = opts.url or f"api/v1/repos/{repo}/statuses/{ref}{list_query(opts)}"
        out, res = await self._client.call("GET", path, into=list[StatusPayload])
        return [convert_status(s) for s in out], res

    async def create_status(
        self, repo: str, ref: str, status: StatusInput
    ) -> tuple[Status, Response]:
        payload = {
            "state": convert_from_state(status.state),
            "context": status.label,
            "description": status.desc,
            "target_url": status.target,
        }
        out, res = await self._client.call(
            "POST", f"api/v1/repos/{repo}/statuses/{ref}", payload, into=StatusPayload
        )
        return convert_status(out), res

    async def list(
        self, opts: ListOptions = ListOptions()
    ) -> tuple[list[Repository], Response]:
        path = opts.url or f"api/v1/user/repos{list_query(opts)}"
        out, res = await self._client.call("GET", path, into=list[RepositoryPayload])
        return [convert_repository(r) for r in out], res


from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from forgebridge._errors import NotFoundError, NotSupportedError
from forgebridge._page import ListOptions, list_query
from forgebridge._payload import Payload
from forgebridge._types import Comment, CommentInput, Issue, IssueInput, PullRequest
from forgebridge._users import UserPayload, convert_user

if TYPE_CHECKING:
    from forgebridge._client import Client
    from forgebridge._response import Response


class LabelPayload(Payload):
    name: str = ""


class IssuePullRequestPayload(Payload):
    """Present on an issue only when the issue is a pull request."""

    merged: bool = False
    merged_at: datetime | None = None


class IssuePayload(Payload):
    id: int = 0
    number: int = 0
    html_url: str = ""
    user: UserPayload = UserPayload()
    title: str = ""
    body: str = ""
    state: str = ""
    labels: list[LabelPayload] = Field(default_factory=list)
    comments: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pull_request: IssuePullRequestPayload | None = None


class IssueCommentPayload(Payload):
    id: int = 0
    html_url: str = ""
    user: UserPayload = UserPayload()
    body: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


def convert_issue(src: IssuePayload) -> Issue:
    return Issue(
        number=src.number,
        title=src.title,
        body=src.body,
        link=src.html_url,
        labels=[label.name for label in src.labels],
        closed=src.state == "closed",
        author=convert_user(src.user),
        created=src.created_at,
        updated=src.updated_at,
    )


def convert_issue_comment(src: IssueCommentPayload) -> Comment:
    return Comment(
        id=src.id,
        body=src.body,
        link=src.html_url,
        author=convert_user(src.user),
        created=src.created_at,
        updated=src.updated_at,
    )


def convert_pull_request_from_issue(src: IssuePayload) -> PullRequest:
    return PullRequest(
        number=src.number,
        title=src.title,
        body=src.body,
        link=src.html_url,
        ref=f"refs/pull/{src.number}/head",
        closed=src.state == "closed",
        merged=src.pull_request is not None and src.pull_request.merged,
        author=convert_user(src.user),
        created=src.created_at,
        updated=src.updated_at,
    )


class Issues:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def find(self, repo: str, number: int) -> tuple[Issue, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/repos/{repo}/issues/{number}", into=IssuePayload
        )
        return convert_issue(out), res

    async def find_comment(
        self, repo: str, number: int, comment_id: int
    ) -> tuple[Comment, Response]:
        # The backend has no single-comment endpoint scoped to an issue.
        comments, res = await self.list_comments(repo, number)
        for comment in comments:
            if comment.id == comment_id:
                return comment, res
        msg = f"comment {comment_id} not found on {repo}#{number}"
        raise NotFoundError(msg)

    async def list_comments(
        self, repo: str, number: int, opts: ListOptions = ListOptions()
    ) -> tuple[list[Comment], Response]:
        path = opts.url or (
            f"api/v1/repos/{repo}/issues/{number}/comments{list_query(opts)}"
        )
        out, res = await self._client.call(
            "GET", path, into=list[IssueCommentPayload]
        )
        return [convert_issue_comment(c) for c in out], res

    async def create(self, repo: str, issue: IssueInput) -> tuple[Issue, Response]:
        out, res = await self._client.call(
            "POST",
            f"api/v1/repos/{repo}/issues",
            {"title": issue.title, "body": issue.body},
            into=IssuePayload,
        )
        return convert_issue(out), res

    async def create_comment(
        self, repo: str, number: int, comment: CommentInput
    ) -> tuple[Comment, Response]:
        out, res = await self._client.call(
            "POST",
            f"api/v1/repos/{repo}/issues/{number}/comments",
            {"body": comment.body},
            into=IssueCommentPayload,
        )
        return convert_issue_comment(out), res

    async def delete_comment(self, repo: str, number: int, comment_id: int) -> Response:
        _, res = await self._client.call(
            "DELETE", f"api/v1/repos/{repo}/issues/comments/{comment_id}"
        )
        return res

    async def close(self, repo: str, number: int) -> Response:
        _, res = await self._client.call(
            "PATCH", f"api/v1/repos/{repo}/issues/{number}", {"state": "closed"}
        )
        return res

    async def lock(self, repo: str, number: int) -> Response:
        raise NotSupportedError

    async def unlock(self, repo: str, number: int) -> Response:
        raise NotSupportedError

    async def list(
        self, repo: str, opts: ListOptions = ListOptions()
    ) -> tuple[list[Issue], Response]:
        path = opts.url or (
            f"api/v1/repos/{repo}/issues{list_query(opts, type='issues')}"
        )
        out, res = await self._client.call("GET", path, into=list[IssuePayload])
        return [convert_issue(i) for i in out], res

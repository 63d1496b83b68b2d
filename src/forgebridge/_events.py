from __future__ import annotations

from enum import Enum
from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field

from forgebridge._types import (
    Comment,
    Commit,
    Issue,
    PullRequest,
    Reference,
    Repository,
    User,
)


class Action(Enum):
    """The action a webhook event reports. `UNKNOWN` is the zero value."""

    UNKNOWN = 0
    CREATE = 1
    UPDATE = 2
    DELETE = 3
    OPEN = 4
    REOPEN = 5
    CLOSE = 6
    LABEL = 7
    UNLABEL = 8
    SYNC = 9
    MERGE = 10

    @classmethod
    def parse(cls, value: str) -> Action:
        """Translate a backend action string, falling back to `UNKNOWN`."""
        return _ACTIONS.get(value, cls.UNKNOWN)


_ACTIONS = {
    "create": Action.CREATE,
    "created": Action.CREATE,
    "delete": Action.DELETE,
    "deleted": Action.DELETE,
    "update": Action.UPDATE,
    "updated": Action.UPDATE,
    "edit": Action.UPDATE,
    "edited": Action.UPDATE,
    "open": Action.OPEN,
    "opened": Action.OPEN,
    "reopen": Action.REOPEN,
    "reopened": Action.REOPEN,
    "close": Action.CLOSE,
    "closed": Action.CLOSE,
    "label": Action.LABEL,
    "labeled": Action.LABEL,
    "unlabel": Action.UNLABEL,
    "unlabeled": Action.UNLABEL,
    "merge": Action.MERGE,
    "merged": Action.MERGE,
    "synchronize": Action.SYNC,
    "synchronized": Action.SYNC,
}


class WebhookEvent(BaseModel):
    """Fields shared by every normalized event."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[str]

    action: Action = Action.UNKNOWN
    repo: Repository
    sender: User


class PushEvent(WebhookEvent):
    kind: ClassVar[str] = "push"

    ref: str = ""
    before: str = ""
    after: str = ""
    commit: Commit
    commits: list[Commit] = Field(default_factory=list)


class BranchEvent(WebhookEvent):
    kind: ClassVar[str] = "branch"

    ref: Reference


class TagEvent(WebhookEvent):
    kind: ClassVar[str] = "tag"

    ref: Reference


class IssueEvent(WebhookEvent):
    kind: ClassVar[str] = "issue"

    issue: Issue


class IssueCommentEvent(WebhookEvent):
    kind: ClassVar[str] = "issue_comment"

    issue: Issue
    comment: Comment


class PullRequestEvent(WebhookEvent):
    kind: ClassVar[str] = "pull_request"

    pull_request: PullRequest


class PullRequestCommentEvent(WebhookEvent):
    kind: ClassVar[str] = "pull_request_comment"

    pull_request: PullRequest
    comment: Comment


Event = Union[
    PushEvent,
    BranchEvent,
    TagEvent,
    IssueEvent,
    IssueCommentEvent,
    PullRequestEvent,
    PullRequestCommentEvent,
]

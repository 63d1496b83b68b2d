from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True)


class User(_Model):
    id: str = ""
    login: str = ""
    name: str = ""
    email: str = ""
    avatar: str = ""
    is_admin: bool = False


class Perm(_Model):
    """A user's permissions on a repository."""

    pull: bool = False
    push: bool = False
    admin: bool = False


class Repository(_Model):
    id: str = ""
    namespace: str = ""
    name: str = ""
    perm: Perm | None = None
    branch: str = ""
    archived: bool = False
    private: bool = False
    clone: str = ""
    clone_ssh: str = ""
    link: str = ""
    created: datetime | None = None
    updated: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


class Hook(_Model):
    id: str = ""
    name: str = ""
    target: str = ""
    events: list[str] = Field(default_factory=list)
    active: bool = False
    skip_verify: bool = False


class HookEvents(_Model):
    branch: bool = False
    issue: bool = False
    issue_comment: bool = False
    pull_request: bool = False
    pull_request_comment: bool = False
    push: bool = False
    tag: bool = False


class HookInput(_Model):
    """
    Input for creating or updating a repository webhook. `native_events` are passed through
    as-is, for backend events that `HookEvents` can't express.
    """

    name: str = ""
    target: str
    secret: str = ""
    events: HookEvents = HookEvents()
    skip_verify: bool = False
    native_events: list[str] = Field(default_factory=list)


class State(Enum):
    """The state of a commit status."""

    UNKNOWN = 0
    PENDING = 1
    RUNNING = 2
    SUCCESS = 3
    FAILURE = 4
    CANCELED = 5
    ERROR = 6


class Status(_Model):
    state: State = State.UNKNOWN
    label: str = ""
    desc: str = ""
    target: str = ""


class StatusInput(_Model):
    state: State
    label: str = ""
    desc: str = ""
    target: str = ""


class Reference(NamedTuple):
    """A git reference, e.g. `refs/heads/main`, optionally pinned to a commit."""

    path: str
    sha: str = ""


class Signature(_Model):
    """The identity attached to a commit."""

    login: str = ""
    name: str = ""
    email: str = ""
    date: datetime | None = None


class Commit(_Model):
    sha: str = ""
    message: str = ""
    link: str = ""
    author: Signature = Signature()
    committer: Signature = Signature()


class Comment(_Model):
    id: int = 0
    body: str = ""
    link: str = ""
    author: User = User()
    created: datetime | None = None
    updated: datetime | None = None


class CommentInput(_Model):
    body: str


class Issue(_Model):
    number: int = 0
    title: str = ""
    body: str = ""
    link: str = ""
    labels: list[str] = Field(default_factory=list)
    closed: bool = False
    author: User = User()
    created: datetime | None = None
    updated: datetime | None = None


class IssueInput(_Model):
    title: str
    body: str = ""


class PullRequest(_Model):
    number: int = 0
    title: str = ""
    body: str = ""
    sha: str = ""
    ref: str = ""
    source: str = ""
    target: str = ""
    fork: str = ""
    link: str = ""
    closed: bool = False
    merged: bool = False
    author: User = User()
    created: datetime | None = None
    updated: datetime | None = None


class Release(_Model):
    id: int = 0
    title: str = ""
    description: str = ""
    link: str = ""
    tag: str = ""
    commitish: str = ""
    draft: bool = False
    prerelease: bool = False
    created: datetime | None = None
    published: datetime | None = None


class ReleaseInput(_Model):
    tag: str
    title: str = ""
    description: str = ""
    commitish: str = ""
    draft: bool = False
    prerelease: bool = False


class Organization(_Model):
    name: str = ""
    avatar: str = ""


class ContentKind(Enum):
    UNSUPPORTED = 0
    FILE = 1
    DIRECTORY = 2
    SYMLINK = 3
    GITLINK = 4


class Content(_Model):
    """A file's raw contents at some ref."""

    path: str
    data: bytes = b""


class ContentInfo(_Model):
    path: str = ""
    sha: str = ""
    kind: ContentKind = ContentKind.UNSUPPORTED

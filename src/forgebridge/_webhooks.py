"""
Webhook ingestion: classify a delivery by its event header, decode the body into
the matching payload shape, convert it into a normalized event, then check the
delivery's signature against the secret the caller looks up for that event.
"""

from __future__ import annotations

import hmac
import logging
from collections.abc import Callable
from datetime import datetime
from functools import partial
from typing import TYPE_CHECKING, Any, BinaryIO, NamedTuple

from githubkit import webhooks
from pydantic import Field, ValidationError

from forgebridge._errors import (
    AuthIssueKind,
    InvalidSignatureError,
    UnknownEventError,
    WebhookPayloadError,
)
from forgebridge._events import (
    Action,
    BranchEvent,
    Event,
    IssueCommentEvent,
    IssueEvent,
    PullRequestCommentEvent,
    PullRequestEvent,
    PushEvent,
    TagEvent,
)
from forgebridge._issues import (
    IssueCommentPayload,
    IssuePayload,
    convert_issue,
    convert_issue_comment,
    convert_pull_request_from_issue,
)
from forgebridge._payload import Payload
from forgebridge._pulls import PullRequestPayload, convert_pull_request
from forgebridge._repos import RepositoryPayload, convert_repository
from forgebridge._types import Commit, Reference, Signature
from forgebridge._users import UserPayload, convert_user

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

SecretLookup = Callable[[Event], str]

EVENT_HEADER = "x-gitea-event"
LEGACY_EVENT_HEADER = "x-gogs-event"
SIG_HEADER = "x-gitea-signature"
# Checked in order when the primary signature header is absent.
LEGACY_SIG_HEADERS = ("x-gogs-signature", "x-hub-signature-256")
SIG_PREFIX = "sha256="

# Larger bodies are truncated, not rejected.
MAX_BODY_SIZE = 10_000_000


class ParsedDelivery(NamedTuple):
    """
    A normalized event with the outcome of its verification. `error` is `None`
    for authentic deliveries; otherwise it holds either an `InvalidSignatureError`
    or the exception raised by the secret lookup.
    """

    event: Event
    error: Exception | None = None

    @property
    def authentic(self) -> bool:
        return self.error is None


#
# payload shapes
#


class _Hook(Payload):
    secret: str = ""
    repository: RepositoryPayload
    sender: UserPayload


class _CommitUser(Payload):
    name: str = ""
    email: str = ""
    username: str = ""


class _Commit(Payload):
    id: str = ""
    message: str = ""
    url: str = ""
    author: _CommitUser = _CommitUser()
    committer: _CommitUser = _CommitUser()
    timestamp: datetime | None = None


class _PushHook(_Hook):
    ref: str = ""
    before: str = ""
    after: str = ""
    compare_url: str = ""
    commits: list[_Commit] = Field(default_factory=list)
    pusher: UserPayload = UserPayload()


class _CreateHook(_Hook):
    """Shared by `create` and `delete` deliveries; `ref_type` tells tags from branches."""

    ref: str = ""
    ref_type: str = ""
    sha: str = ""
    default_branch: str = ""


class _IssueHook(_Hook):
    """Shared by `issues` and `issue_comment` deliveries."""

    action: str = ""
    issue: IssuePayload = IssuePayload()
    comment: IssueCommentPayload = IssueCommentPayload()


class _PullRequestHook(_Hook):
    action: str = ""
    number: int = 0
    pull_request: PullRequestPayload = PullRequestPayload()


#
# conversion
#


def _convert_signature(src: _CommitUser, date: datetime | None) -> Signature:
    return Signature(login=src.username, name=src.name, email=src.email, date=date)


def _convert_commit(src: _Commit) -> Commit:
    return Commit(
        sha=src.id,
        message=src.message,
        link=src.url,
        author=_convert_signature(src.author, src.timestamp),
        committer=_convert_signature(src.committer, src.timestamp),
    )


def _convert_push(src: _PushHook) -> PushEvent:
    if src.commits:
        # The head commit is the last one pushed; it links to the whole diff.
        head = _convert_commit(src.commits[-1])
        commit = head.model_copy(update={"sha": src.after, "link": src.compare_url})
    else:
        pusher = Signature(
            login=src.pusher.effective_login,
            name=src.pusher.full_name,
            email=src.pusher.email,
        )
        commit = Commit(
            sha=src.after, link=src.compare_url, author=pusher, committer=pusher
        )
    return PushEvent(
        ref=src.ref,
        before=src.before,
        after=src.after,
        commit=commit,
        commits=[_convert_commit(c) for c in src.commits],
        repo=convert_repository(src.repository),
        sender=convert_user(src.sender),
    )


def _convert_ref(src: _CreateHook, action: Action) -> BranchEvent | TagEvent:
    repo = convert_repository(src.repository)
    sender = convert_user(src.sender)
    if src.ref_type == "tag":
        ref = Reference(src.ref, src.sha)
        return TagEvent(action=action, ref=ref, repo=repo, sender=sender)
    if src.ref_type == "branch":
        ref = Reference(src.ref)
        return BranchEvent(action=action, ref=ref, repo=repo, sender=sender)
    msg = f"unknown ref type: {src.ref_type!r}"
    raise UnknownEventError(msg)


def _convert_issue(src: _IssueHook) -> IssueEvent:
    return IssueEvent(
        action=Action.parse(src.action),
        issue=convert_issue(src.issue),
        repo=convert_repository(src.repository),
        sender=convert_user(src.sender),
    )


def _convert_issue_comment(
    src: _IssueHook,
) -> IssueCommentEvent | PullRequestCommentEvent:
    action = Action.parse(src.action)
    comment = convert_issue_comment(src.comment)
    repo = convert_repository(src.repository)
    sender = convert_user(src.sender)
    if src.issue.pull_request is not None:
        return PullRequestCommentEvent(
            action=action,
            pull_request=convert_pull_request_from_issue(src.issue),
            comment=comment,
            repo=repo,
            sender=sender,
        )
    return IssueCommentEvent(
        action=action,
        issue=convert_issue(src.issue),
        comment=comment,
        repo=repo,
        sender=sender,
    )


def _convert_pull_request(src: _PullRequestHook) -> PullRequestEvent:
    return PullRequestEvent(
        action=Action.parse(src.action),
        pull_request=convert_pull_request(src.pull_request),
        repo=convert_repository(src.repository),
        sender=convert_user(src.sender),
    )


_SHAPES: dict[str, tuple[type[_Hook], Callable[[Any], Event]]] = {
    "push": (_PushHook, _convert_push),
    "create": (_CreateHook, partial(_convert_ref, action=Action.CREATE)),
    "delete": (_CreateHook, partial(_convert_ref, action=Action.DELETE)),
    "issues": (_IssueHook, _convert_issue),
    "issue_comment": (_IssueHook, _convert_issue_comment),
    "pull_request": (_PullRequestHook, _convert_pull_request),
}

#
# verification
#


def _read_body(body: bytes | BinaryIO) -> bytes:
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body[:MAX_BODY_SIZE])

    # A single read may return less than requested; stop at EOF or the limit.
    chunks: list[bytes] = []
    size = 0
    while size < MAX_BODY_SIZE:
        chunk = body.read(MAX_BODY_SIZE - size)
        if not chunk:
            break
        chunks.append(chunk)
        size += len(chunk)
    return b"".join(chunks)


def _signature(headers: Mapping[str, str]) -> str:
    for name in (SIG_HEADER, *LEGACY_SIG_HEADERS):
        if signature := headers.get(name):
            return signature
    return ""


def _check(
    key: str, body_secret: str, signature: str, body: bytes
) -> AuthIssueKind | None:
    if not signature and not body_secret:
        return AuthIssueKind.MISSING

    if not signature:
        if hmac.compare_digest(body_secret.encode(), key.encode()):
            return None
        return AuthIssueKind.MISMATCH

    if not signature.startswith(SIG_PREFIX):
        signature = f"{SIG_PREFIX}{signature}"
    if signature.isascii() and webhooks.verify(key, body, signature.lower()):
        return None
    return AuthIssueKind.MISMATCH


def event_name(headers: Mapping[str, str]) -> str | None:
    """Return the event kind named by a delivery's (casefolded) headers."""
    return headers.get(EVENT_HEADER) or headers.get(LEGACY_EVENT_HEADER)


def parse_delivery(
    headers: Mapping[str, str],
    body: bytes | BinaryIO,
    secret_lookup: SecretLookup,
) -> ParsedDelivery:
    """
    Turn an inbound webhook delivery into a normalized event.

    Raises `UnknownEventError` for event kinds (or create/delete ref types) that
    have no normalized counterpart, and `WebhookPayloadError` when the body
    doesn't decode. Signature failures don't raise: the event is returned with
    the failure so callers can still inspect what was rejected.
    """
    headers = {k.casefold(): v for k, v in headers.items()}
    name = event_name(headers)
    if not name or name not in _SHAPES:
        msg = f"unknown event kind: {name!r}"
        raise UnknownEventError(msg)

    data = _read_body(body)
    shape, convert = _SHAPES[name]
    try:
        hook = shape.model_validate_json(data)
    except ValidationError as exc:
        msg = "the received payload could not be parsed as an event"
        raise WebhookPayloadError(msg) from exc
    event = convert(hook)

    try:
        key = secret_lookup(event)
    except Exception as exc:  # noqa: BLE001
        return ParsedDelivery(event, exc)
    if not key:
        return ParsedDelivery(event)

    if issue := _check(key, hook.secret, _signature(headers), data):
        logger.debug("rejected %s delivery: signature %s", name, issue.value)
        return ParsedDelivery(event, InvalidSignatureError(issue))
    return ParsedDelivery(event)

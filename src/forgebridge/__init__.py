from ._client import Client, Request
from ._errors import (
    APIError,
    AuthIssue,
    AuthIssueKind,
    Error,
    ForgeBridgeError,
    ForgeBridgeSetupError,
    InvalidSignatureError,
    NotAuthorizedError,
    NotFoundError,
    NotSupportedError,
    StatusReason,
    UnknownEventError,
    WebhookPayloadError,
    is_already_exists,
    is_bad_request,
    is_conflict,
    is_expired,
    is_forbidden,
    is_gone,
    is_internal_error,
    is_invalid,
    is_method_not_supported,
    is_not_acceptable,
    is_not_found,
    is_request_entity_too_large,
    is_server_timeout,
    is_service_unavailable,
    is_timeout,
    is_too_many_requests,
    is_unauthorized,
    is_unsupported_media_type,
    reason_for_error,
)
from ._events import (
    Action,
    BranchEvent,
    Event,
    IssueCommentEvent,
    IssueEvent,
    PullRequestCommentEvent,
    PullRequestEvent,
    PushEvent,
    TagEvent,
    WebhookEvent,
)
from ._linker import Linker
from ._page import ListOptions, Page, parse_links
from ._response import Rate, Response
from ._router import WebhookRouter
from ._settings import ClientSettings
from ._traverse import collect, repos
from ._types import (
    Comment,
    CommentInput,
    Commit,
    Content,
    ContentInfo,
    ContentKind,
    Hook,
    HookEvents,
    HookInput,
    Issue,
    IssueInput,
    Organization,
    Perm,
    PullRequest,
    Reference,
    Release,
    ReleaseInput,
    Repository,
    Signature,
    State,
    Status,
    StatusInput,
    User,
)
from ._webhooks import ParsedDelivery, SecretLookup, parse_delivery

__all__ = (
    "APIError",
    "Action",
    "AuthIssue",
    "AuthIssueKind",
    "BranchEvent",
    "Client",
    "ClientSettings",
    "Comment",
    "CommentInput",
    "Commit",
    "Content",
    "ContentInfo",
    "ContentKind",
    "Error",
    "Event",
    "ForgeBridgeError",
    "ForgeBridgeSetupError",
    "Hook",
    "HookEvents",
    "HookInput",
    "InvalidSignatureError",
    "Issue",
    "IssueCommentEvent",
    "IssueEvent",
    "IssueInput",
    "Linker",
    "ListOptions",
    "NotAuthorizedError",
    "NotFoundError",
    "NotSupportedError",
    "Organization",
    "Page",
    "ParsedDelivery",
    "Perm",
    "PullRequest",
    "PullRequestCommentEvent",
    "PullRequestEvent",
    "PushEvent",
    "Rate",
    "Reference",
    "Release",
    "ReleaseInput",
    "Repository",
    "Request",
    "Response",
    "SecretLookup",
    "Signature",
    "State",
    "Status",
    "StatusInput",
    "StatusReason",
    "TagEvent",
    "UnknownEventError",
    "User",
    "WebhookEvent",
    "WebhookPayloadError",
    "WebhookRouter",
    "collect",
    "is_already_exists",
    "is_bad_request",
    "is_conflict",
    "is_expired",
    "is_forbidden",
    "is_gone",
    "is_internal_error",
    "is_invalid",
    "is_method_not_supported",
    "is_not_acceptable",
    "is_not_found",
    "is_request_entity_too_large",
    "is_server_timeout",
    "is_service_unavailable",
    "is_timeout",
    "is_too_many_requests",
    "is_unauthorized",
    "is_unsupported_media_type",
    "parse_delivery",
    "parse_links",
    "reason_for_error",
    "repos",
)

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, Literal, NoReturn, TypeVar, cast, final

from forgebridge._errors import ForgeBridgeSetupError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from typing_extensions import ParamSpec, Self, TypeAlias

    from forgebridge._errors import AuthIssue, Error
    from forgebridge._events import (
        BranchEvent,
        Event,
        IssueCommentEvent,
        IssueEvent,
        PullRequestCommentEvent,
        PullRequestEvent,
        PushEvent,
        TagEvent,
    )

    P = ParamSpec("P")

    Hook: TypeAlias = "Callable[P, Awaitable[None]]"
    HookWrapper: TypeAlias = "Callable[[Hook[P]], Hook[P]]"


E = TypeVar("E")
L = TypeVar("L", bound=str)
InternalEventName = Literal["auth_issue", "error"]
EventKind = Literal[
    "push",
    "branch",
    "tag",
    "issue",
    "issue_comment",
    "pull_request",
    "pull_request_comment",
]


def build_registrar(name: str) -> HookWrapper[...]:
    @property
    def prop(self: HookNamespace[Any, E]) -> Callable[[Hook[[E]]], Hook[[E]]]:
        def wrapper(hook: Hook[[E]]) -> Hook[[E]]:
            self._paths[name].append(hook)  # pyright: ignore[reportPrivateUsage]
            return hook

        return wrapper

    return cast("HookWrapper[...]", prop)


class HookNamespace(Generic[L, E]):
    def __init_subclass__(cls) -> None:
        super().__init_subclass__()
        names = [cast("L", entry) for entry in dir(cls) if not entry.startswith("_")]

        def filling_init(self: Self) -> None:
            self._paths = {n: [] for n in names}
            self._any_hooks = []

        cls.__init__ = filling_init

    def __init__(self) -> None:
        self._paths: dict[L, list[Hook[[E]]]] = {}
        self._any_hooks: list[Hook[[E]]] = []

    def __call__(self, hook: Hook[[E]]) -> Hook[[E]]:
        self._any_hooks.append(hook)
        return hook

    def __getitem__(self, name: L | Literal["*"]) -> list[Hook[[E]]]:
        if name == "*":
            return self._any_hooks
        return self._paths[name]


@final
class EventNamespace(HookNamespace[EventKind, "Event"]):
    push: HookWrapper[[PushEvent]] = build_registrar("push")
    branch: HookWrapper[[BranchEvent]] = build_registrar("branch")
    tag: HookWrapper[[TagEvent]] = build_registrar("tag")
    issue: HookWrapper[[IssueEvent]] = build_registrar("issue")
    issue_comment: HookWrapper[[IssueCommentEvent]] = build_registrar("issue_comment")
    pull_request: HookWrapper[[PullRequestEvent]] = build_registrar("pull_request")
    pull_request_comment: HookWrapper[[PullRequestCommentEvent]] = build_registrar(
        "pull_request_comment"
    )

    @property
    def any(self) -> HookWrapper[[Event]]:
        """Register a hook receiving every event, whatever its kind."""
        return self.__call__


@final
class InternalNamespace(HookNamespace[InternalEventName, object]):
    auth_issue: HookWrapper[[AuthIssue]] = build_registrar("auth_issue")
    error: HookWrapper[[Error]] = build_registrar("error")

    def __call__(self, _: object) -> NoReturn:
        msg = (
            "bare @WebhookRouter.internal is not allowed, please specify a concrete"
            " internal event"
        )
        raise ForgeBridgeSetupError(msg)

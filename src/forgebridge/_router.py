from __future__ import annotations

import asyncio
import logging
from itertools import chain
from typing import TYPE_CHECKING, Any, BinaryIO, final

from forgebridge._errors import (
    AuthIssue,
    AuthIssueKind,
    Error,
    InvalidSignatureError,
    UnknownEventError,
    WebhookPayloadError,
)
from forgebridge._namespace import EventNamespace, InternalNamespace
from forgebridge._webhooks import event_name, parse_delivery

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from typing_extensions import ParamSpec

    from forgebridge._events import Event
    from forgebridge._namespace import Hook
    from forgebridge._webhooks import ParsedDelivery, SecretLookup

    P = ParamSpec("P")

logger = logging.getLogger(__name__)


@final
class WebhookRouter:
    """
    Routes webhook deliveries to async hooks registered per event kind. `secret`
    is either a fixed shared secret or a callable looking one up per event; no
    secret disables verification.
    """

    def __init__(self, secret: str | SecretLookup | None = None) -> None:
        self._secret = secret
        self._event = EventNamespace()
        self._internal = InternalNamespace()

    @property
    def event(self) -> EventNamespace:
        return self._event

    @property
    def internal(self) -> InternalNamespace:
        return self._internal

    def _lookup(self, event: Event) -> str:
        if callable(self._secret):
            return self._secret(event)
        return self._secret or ""

    async def _report_auth_issue(
        self, issue_kind: AuthIssueKind, event: Event, headers: Mapping[str, str]
    ) -> None:
        await self._dispatch_hooks(
            headers,
            "auth_issue",
            self.internal["auth_issue"],
            AuthIssue(issue_kind, event, headers),
        )

    async def _raise(
        self,
        exc: Exception,
        headers: Mapping[str, str] | None = None,
        event_name: str | None = None,
    ) -> None:
        if not (error_hooks := self.internal["error"]):
            raise exc
        await self._dispatch_hooks(
            headers, event_name, error_hooks, Error(exc, event_name, headers)
        )

    async def dispatch(
        self, headers: Mapping[str, str], body: bytes | BinaryIO
    ) -> ParsedDelivery | None:
        """
        Parse and verify one delivery, then run the hooks registered for its event.
        Returns `None` when the delivery couldn't be parsed.
        """
        headers = {k.casefold(): v for k, v in headers.items()}
        name = event_name(headers)
        try:
            delivery = parse_delivery(headers, body, self._lookup)
        except (UnknownEventError, WebhookPayloadError) as exc:
            await self._raise(exc, headers, name)
            return None

        if isinstance(delivery.error, InvalidSignatureError):
            await self._report_auth_issue(delivery.error.kind, delivery.event, headers)
            return delivery
        if delivery.error is not None:
            await self._raise(delivery.error, headers, name)
            return delivery

        kind = delivery.event.kind
        logger.debug("dispatching %s event", kind)
        hooks = chain(self.event["*"], self.event[kind])  # pyright: ignore[reportArgumentType]
        await self._dispatch_hooks(headers, kind, hooks, delivery.event)
        return delivery

    async def _dispatch_hooks(
        self,
        headers: Mapping[str, str] | None,
        event_name: str | None,
        hooks: Iterable[Hook[P]] | None,
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> None:
        if hooks is None:
            return
        coros = (h(*args, **kwargs) for h in hooks)
        excs: list[Any] = await asyncio.gather(*coros, return_exceptions=True)
        for exc in filter(None, excs):
            if not isinstance(exc, Exception):
                # Don't handle non-Exceptions (like SystemExits or KeyboardInterrupts)
                raise exc
            await self._raise(exc, headers, event_name)

from __future__ import annotations

import re
from typing import TYPE_CHECKING, final

if TYPE_CHECKING:
    from forgebridge._types import Reference

_PULL_REF = re.compile(r"^refs/pull(?:-requests)?/(\d+)/(?:head|merge)$")
_REF_PREFIXES = ("refs/heads/", "refs/tags/")


def is_tag(ref: str) -> bool:
    return ref.startswith("refs/tags/")


def is_pull_request(ref: str) -> bool:
    return _PULL_REF.match(ref) is not None


def extract_pull_request(ref: str) -> int:
    """Return the pull request number encoded in `ref`, or 0."""
    return int(m.group(1)) if (m := _PULL_REF.match(ref)) else 0


def trim_ref(ref: str) -> str:
    for prefix in _REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix) :]
    return ref


@final
class Linker:
    """Builds web UI links for references and diffs."""

    def __init__(self, base: str) -> None:
        self._base = base if base.endswith("/") else f"{base}/"

    def resource(self, repo: str, ref: Reference) -> str:
        if is_tag(ref.path):
            return f"{self._base}{repo}/src/tag/{trim_ref(ref.path)}"
        if is_pull_request(ref.path):
            return f"{self._base}{repo}/pulls/{extract_pull_request(ref.path)}"
        if not ref.sha:
            return f"{self._base}{repo}/src/branch/{trim_ref(ref.path)}"
        return f"{self._base}{repo}/commit/{ref.sha}"

    def diff(self, repo: str, source: Reference, target: Reference) -> str:
        if is_pull_request(target.path):
            number = extract_pull_request(target.path)
            return f"{self._base}{repo}/pulls/{number}/files"
        s = source.sha or trim_ref(source.path)
        t = target.sha or trim_ref(target.path)
        return f"{self._base}{repo}/compare/{s}...{t}"

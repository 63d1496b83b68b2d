from __future__ import annotations

import json
from typing import Any

from githubkit.webhooks import sign as ghk_sign

EX_URL = "https://forge.example.com"

DUMMY_USER = {
    "id": 1,
    "login": "octo",
    "username": "octo",
    "full_name": "Octo Cat",
    "email": "octo@example.com",
    "avatar_url": f"{EX_URL}/avatars/1",
}

DUMMY_PUSHER = {
    "id": 2,
    "login": "pusher",
    "username": "pusher",
    "full_name": "Pusher Person",
    "email": "pusher@example.com",
}

DUMMY_REPO = {
    "id": 7,
    "owner": DUMMY_USER,
    "name": "hello",
    "full_name": "octo/hello",
    "private": False,
    "html_url": f"{EX_URL}/octo/hello",
    "clone_url": f"{EX_URL}/octo/hello.git",
    "ssh_url": "git@forge.example.com:octo/hello.git",
    "default_branch": "main",
    "permissions": {"admin": True, "push": True, "pull": True},
}


def commit(sha: str, message: str, username: str) -> dict[str, Any]:
    identity = {
        "name": username.title(),
        "email": f"{username}@example.com",
        "username": username,
    }
    return {
        "id": sha,
        "message": message,
        "url": f"{EX_URL}/octo/hello/commit/{sha}",
        "author": identity,
        "committer": identity,
        "timestamp": "2025-08-14T10:00:00Z",
    }


PUSH_BODY = {
    "ref": "refs/heads/main",
    "before": "aaa111",
    "after": "ccc333",
    "compare_url": f"{EX_URL}/octo/hello/compare/aaa111...ccc333",
    "commits": [
        commit("bbb222", "first change", "alice"),
        commit("ccc333", "second change", "bob"),
    ],
    "repository": DUMMY_REPO,
    "pusher": DUMMY_PUSHER,
    "sender": DUMMY_USER,
}


def ref_body(ref_type: str) -> dict[str, Any]:
    return {
        "ref": "v1.0.0" if ref_type == "tag" else "feature",
        "ref_type": ref_type,
        "sha": "ddd444",
        "default_branch": "main",
        "repository": DUMMY_REPO,
        "sender": DUMMY_USER,
    }


ISSUE = {
    "id": 100,
    "number": 5,
    "html_url": f"{EX_URL}/octo/hello/issues/5",
    "user": DUMMY_USER,
    "title": "Broken build",
    "body": "It fails.",
    "state": "open",
    "labels": [{"name": "bug"}],
    "comments": 1,
    "created_at": "2025-08-14T09:00:00Z",
    "updated_at": "2025-08-14T09:30:00Z",
    "pull_request": None,
}

COMMENT = {
    "id": 900,
    "html_url": f"{EX_URL}/octo/hello/issues/5#issuecomment-900",
    "user": DUMMY_USER,
    "body": "Same here.",
    "created_at": "2025-08-14T09:30:00Z",
    "updated_at": "2025-08-14T09:30:00Z",
}


def issue_body(action: str) -> dict[str, Any]:
    return {
        "action": action,
        "issue": ISSUE,
        "repository": DUMMY_REPO,
        "sender": DUMMY_USER,
    }


def issue_comment_body(*, on_pull_request: bool) -> dict[str, Any]:
    issue = ISSUE
    if on_pull_request:
        issue = ISSUE | {"pull_request": {"merged": False, "merged_at": None}}
    return {
        "action": "created",
        "issue": issue,
        "comment": COMMENT,
        "repository": DUMMY_REPO,
        "sender": DUMMY_USER,
    }


PULL_REQUEST = {
    "id": 300,
    "number": 12,
    "user": DUMMY_USER,
    "title": "Fix the build",
    "body": "Fixes #5",
    "state": "open",
    "html_url": f"{EX_URL}/octo/hello/pulls/12",
    "merged": False,
    "head": {"label": "fix", "ref": "fix", "sha": "eee555", "repo": DUMMY_REPO},
    "base": {"label": "main", "ref": "main", "sha": "aaa111", "repo": DUMMY_REPO},
}


def pull_request_body(action: str) -> dict[str, Any]:
    return {
        "action": action,
        "number": 12,
        "pull_request": PULL_REQUEST,
        "repository": DUMMY_REPO,
        "sender": DUMMY_USER,
    }


def encode(body: dict[str, Any]) -> bytes:
    # Indented on purpose: re-serializing the decoded body never reproduces it.
    return json.dumps(body, indent=2).encode()


def sign(secret: str, data: bytes) -> str:
    """Sign `data` the way the backend does: bare lowercase hex."""
    return ghk_sign(secret, data).removeprefix("sha256=")

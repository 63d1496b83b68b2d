from __future__ import annotations

from typing import TYPE_CHECKING

from forgebridge._errors import NotAuthorizedError
from forgebridge._payload import Payload
from forgebridge._types import User

if TYPE_CHECKING:
    from forgebridge._client import Client
    from forgebridge._response import Response


class UserPayload(Payload):
    id: int = 0
    login: str = ""
    username: str = ""
    full_name: str = ""
    email: str = ""
    avatar_url: str = ""
    is_admin: bool = False

    @property
    def effective_login(self) -> str:
        # Older backend versions only populate `username`.
        return self.username or self.login


def convert_user(src: UserPayload) -> User:
    return User(
        id=str(src.id),
        login=src.effective_login,
        name=src.full_name,
        email=src.email,
        avatar=src.avatar_url,
        is_admin=src.is_admin,
    )


class Users:
    def __init__(self, client: Client) -> None:
        self._client = client

    async def find(self) -> tuple[User, Response]:
        """Return the authenticated user."""
        if not self._client.token:
            raise NotAuthorizedError("finding the current user requires a token")
        out, res = await self._client.call("GET", "api/v1/user", into=UserPayload)
        return convert_user(out), res

    async def find_login(self, login: str) -> tuple[User, Response]:
        out, res = await self._client.call(
            "GET", f"api/v1/users/{login}", into=UserPayload
        )
        return convert_user(out), res

    async def find_email(self) -> tuple[str, Response]:
        """Return the authenticated user's primary email address."""
        user, res = await self.find()
        return user.email, res

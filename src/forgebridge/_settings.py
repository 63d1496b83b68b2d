from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """
    Client configuration read from `FORGEBRIDGE_`-prefixed environment variables
    (e.g. `FORGEBRIDGE_BASE_URL`, `FORGEBRIDGE_TOKEN`).
    """

    model_config = SettingsConfigDict(env_prefix="FORGEBRIDGE_", case_sensitive=False)

    base_url: str = "http://localhost:3000"
    token: str | None = None
    # Seconds; applies to connect, read, write and pool acquisition alike.
    timeout: float = 30.0
    debug: bool = False

    @field_validator("base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        return v if v.endswith("/") else f"{v}/"

    @field_validator("timeout")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        return v

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator


class Payload(BaseModel):
    """
    Base for backend wire models. An explicit JSON `null` decodes the same as a
    missing key, so the field falls back to its default.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

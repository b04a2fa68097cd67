"""Base classes for request payloads."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class RequestBody(BaseModel):
    """Inbound payload; surrounding whitespace is stripped before length checks."""

    model_config = ConfigDict(str_strip_whitespace=True)


class PartialUpdate(RequestBody):
    """Request body where omitted fields mean "leave unchanged".

    Fields listed in ``non_nullable`` map to NOT NULL columns: sending an explicit
    ``null`` for them is rejected instead of being read as "clear the value".
    Use :meth:`changes` to obtain only the fields the caller actually sent.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def reject_null_for_required_columns(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulled = sorted(key for key in cls.non_nullable if key in data and data[key] is None)
            if nulled:
                raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return data

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


__all__ = ["RequestBody", "PartialUpdate"]

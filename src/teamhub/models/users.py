"""User account models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from teamhub.models.partial import PartialUpdate, RequestBody
from teamhub.timeutils import UtcDatetime

UserTier = Literal["free", "paid"]
UserStatus = Literal["active", "inactive", "suspended"]


class User(BaseModel):
    """Account able to join teams; its tier gates feature availability."""

    id: int
    email: str
    name: str
    tier: UserTier
    status: UserStatus
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class UserCreateRequest(RequestBody):
    email: EmailStr
    name: str = Field(min_length=1, max_length=255)
    tier: UserTier = "free"
    status: UserStatus = "active"


class UserUpdateRequest(PartialUpdate):
    non_nullable = frozenset({"email", "name", "tier", "status"})

    email: Optional[EmailStr] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    tier: Optional[UserTier] = None
    status: Optional[UserStatus] = None


__all__ = ["User", "UserCreateRequest", "UserUpdateRequest", "UserTier", "UserStatus"]

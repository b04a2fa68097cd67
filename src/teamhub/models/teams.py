"""Team and membership models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.partial import RequestBody
from teamhub.timeutils import UtcDatetime

MembershipStatus = Literal["active", "pending", "rejected"]


class Team(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_by: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class TeamMembership(BaseModel):
    """A user's relationship to a team and its approval state.

    ``joined_at`` is only populated once the membership becomes active.
    """

    id: int
    team_id: int
    user_id: int
    status: MembershipStatus
    joined_at: Optional[UtcDatetime] = None
    created_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class TeamCreateRequest(RequestBody):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)


class MembershipRequest(RequestBody):
    team_id: int


__all__ = [
    "MembershipStatus",
    "Team",
    "TeamMembership",
    "TeamCreateRequest",
    "MembershipRequest",
]

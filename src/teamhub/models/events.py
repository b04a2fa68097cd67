"""Team calendar models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.partial import PartialUpdate, RequestBody
from teamhub.timeutils import UtcDatetime


class CalendarEvent(BaseModel):
    id: int
    team_id: int
    title: str
    description: Optional[str] = None
    start_time: UtcDatetime
    end_time: UtcDatetime
    is_all_day: bool = False
    location: Optional[str] = None
    created_by: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class CalendarEventCreateRequest(RequestBody):
    team_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    start_time: datetime
    end_time: datetime
    is_all_day: bool = False
    location: Optional[str] = Field(default=None, max_length=255)


class CalendarEventUpdateRequest(PartialUpdate):
    non_nullable = frozenset({"title", "start_time", "end_time", "is_all_day"})

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_all_day: Optional[bool] = None
    location: Optional[str] = Field(default=None, max_length=255)


__all__ = ["CalendarEvent", "CalendarEventCreateRequest", "CalendarEventUpdateRequest"]

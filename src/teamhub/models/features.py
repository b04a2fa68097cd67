"""Feature flag models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from teamhub.models.partial import PartialUpdate
from teamhub.timeutils import UtcDatetime


class Feature(BaseModel):
    """Global capability toggled independently for free and paid tiers."""

    id: int
    name: str
    description: Optional[str] = None
    is_enabled_free: bool
    is_enabled_paid: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class FeatureUpdateRequest(PartialUpdate):
    non_nullable = frozenset({"is_enabled_free", "is_enabled_paid"})

    is_enabled_free: Optional[bool] = None
    is_enabled_paid: Optional[bool] = None


__all__ = ["Feature", "FeatureUpdateRequest"]

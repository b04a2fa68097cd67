"""Shopping list models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.partial import PartialUpdate, RequestBody
from teamhub.timeutils import UtcDatetime


class ShoppingList(BaseModel):
    id: int
    team_id: int
    name: str
    description: Optional[str] = None
    created_by: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class ShoppingItem(BaseModel):
    """Single entry on a team shopping list.

    ``purchased_by`` and ``purchased_at`` are populated together while
    ``is_purchased`` is true and cleared together when it is reset.
    """

    id: int
    shopping_list_id: int
    name: str
    quantity: int = Field(ge=1)
    comment: Optional[str] = Field(default=None)
    is_purchased: bool = Field(default=False)
    purchased_by: Optional[int] = None
    purchased_at: Optional[UtcDatetime] = None
    created_by: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class ShoppingListCreateRequest(RequestBody):
    team_id: int
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)


class ShoppingItemCreateRequest(RequestBody):
    shopping_list_id: int
    name: str = Field(min_length=1, max_length=255)
    quantity: int = Field(default=1, gt=0)
    comment: Optional[str] = Field(default=None, max_length=1000)


class ShoppingItemUpdateRequest(PartialUpdate):
    non_nullable = frozenset({"name", "quantity", "is_purchased"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    quantity: Optional[int] = Field(default=None, gt=0)
    comment: Optional[str] = Field(default=None, max_length=1000)
    is_purchased: Optional[bool] = None


__all__ = [
    "ShoppingList",
    "ShoppingItem",
    "ShoppingListCreateRequest",
    "ShoppingItemCreateRequest",
    "ShoppingItemUpdateRequest",
]

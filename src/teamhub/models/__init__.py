"""Pydantic models defining shared data contracts."""

from teamhub.models.events import (
    CalendarEvent,
    CalendarEventCreateRequest,
    CalendarEventUpdateRequest,
)
from teamhub.models.features import Feature, FeatureUpdateRequest
from teamhub.models.shopping import (
    ShoppingItem,
    ShoppingItemCreateRequest,
    ShoppingItemUpdateRequest,
    ShoppingList,
    ShoppingListCreateRequest,
)
from teamhub.models.teams import MembershipRequest, Team, TeamCreateRequest, TeamMembership
from teamhub.models.todos import (
    Task,
    TaskCreateRequest,
    TaskUpdateRequest,
    TodoList,
    TodoListCreateRequest,
)
from teamhub.models.users import User, UserCreateRequest, UserUpdateRequest

__all__ = [
    "CalendarEvent",
    "CalendarEventCreateRequest",
    "CalendarEventUpdateRequest",
    "Feature",
    "FeatureUpdateRequest",
    "ShoppingItem",
    "ShoppingItemCreateRequest",
    "ShoppingItemUpdateRequest",
    "ShoppingList",
    "ShoppingListCreateRequest",
    "MembershipRequest",
    "Team",
    "TeamCreateRequest",
    "TeamMembership",
    "Task",
    "TaskCreateRequest",
    "TaskUpdateRequest",
    "TodoList",
    "TodoListCreateRequest",
    "User",
    "UserCreateRequest",
    "UserUpdateRequest",
]

"""To-do list and task models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from teamhub.models.partial import PartialUpdate, RequestBody
from teamhub.timeutils import UtcDatetime

TaskPriority = Literal["P0", "P1", "P2", "P3"]
TaskStatus = Literal["todo", "in_progress", "completed"]


class TodoList(BaseModel):
    id: int
    team_id: int
    name: str
    description: Optional[str] = None
    created_by: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class Task(BaseModel):
    """Task on a shared to-do list. ``completed_at`` is set iff status is completed."""

    id: int
    todo_list_id: int
    title: str
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: TaskStatus
    assigned_to: Optional[int] = None
    due_date: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None
    created_by: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(frozen=True)


class TodoListCreateRequest(RequestBody):
    team_id: int
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)


class TaskCreateRequest(RequestBody):
    todo_list_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Optional[TaskPriority] = None
    assigned_to: Optional[int] = None
    due_date: Optional[datetime] = None


class TaskUpdateRequest(PartialUpdate):
    non_nullable = frozenset({"title", "status"})

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    assigned_to: Optional[int] = None
    due_date: Optional[datetime] = None


__all__ = [
    "TaskPriority",
    "TaskStatus",
    "TodoList",
    "Task",
    "TodoListCreateRequest",
    "TaskCreateRequest",
    "TaskUpdateRequest",
]

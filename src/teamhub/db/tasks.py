"""Task persistence helpers."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select

from teamhub.errors import NotFoundError
from teamhub.models.todos import Task
from teamhub.timeutils import to_storage, utcnow

from .models import TaskORM
from .repository import session_scope
from .todo_lists import require_todo_list
from .users import require_user

logger = logging.getLogger(__name__)

_UNSET = object()


def _to_model(row: TaskORM) -> Task:
    return Task.model_validate(
        {
            "id": row.id,
            "todo_list_id": row.todo_list_id,
            "title": row.title,
            "description": row.description,
            "priority": row.priority,
            "status": row.status,
            "assigned_to": row.assigned_to,
            "due_date": row.due_date,
            "completed_at": row.completed_at,
            "created_by": row.created_by,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def create_task(
    *,
    todo_list_id: int,
    title: str,
    created_by: int,
    description: Optional[str] = None,
    priority: Optional[str] = None,
    assigned_to: Optional[int] = None,
    due_date: Optional[datetime] = None,
) -> Task:
    with session_scope() as session:
        require_todo_list(session, todo_list_id)
        require_user(session, created_by)
        if assigned_to is not None:
            require_user(session, assigned_to)
        now = utcnow()
        row = TaskORM(
            todo_list_id=todo_list_id,
            title=title,
            description=description,
            priority=priority,
            status="todo",
            assigned_to=assigned_to,
            due_date=to_storage(due_date),
            completed_at=None,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        session.add(row)
        session.flush()
        return _to_model(row)


def list_todo_list_tasks(todo_list_id: int) -> List[Task]:
    """Return the list's tasks, newest first."""

    with session_scope() as session:
        rows = (
            session.execute(
                select(TaskORM)
                .where(TaskORM.todo_list_id == todo_list_id)
                .order_by(TaskORM.created_at.desc(), TaskORM.id.desc())
            )
            .scalars()
            .all()
        )
        return [_to_model(row) for row in rows]


def update_task(
    task_id: int,
    *,
    title: str | object = _UNSET,
    description: str | None | object = _UNSET,
    priority: str | None | object = _UNSET,
    status: str | object = _UNSET,
    assigned_to: int | None | object = _UNSET,
    due_date: datetime | None | object = _UNSET,
) -> Task:
    """Apply a partial update; any status write resynchronises ``completed_at``."""

    with session_scope() as session:
        row = session.get(TaskORM, task_id)
        if row is None:
            raise NotFoundError("Task", task_id)

        now = utcnow()
        if title is not _UNSET:
            row.title = str(title)
        if description is not _UNSET:
            row.description = description  # type: ignore[assignment]
        if priority is not _UNSET:
            row.priority = priority  # type: ignore[assignment]
        if status is not _UNSET:
            row.status = str(status)
            row.completed_at = now if status == "completed" else None
        if assigned_to is not _UNSET:
            if assigned_to is not None:
                require_user(session, assigned_to)  # type: ignore[arg-type]
            row.assigned_to = assigned_to  # type: ignore[assignment]
        if due_date is not _UNSET:
            row.due_date = to_storage(due_date)  # type: ignore[arg-type]
        row.updated_at = now

        session.flush()
        logger.debug("Updated task id=%s status=%s", row.id, row.status)
        return _to_model(row)


__all__ = ["create_task", "list_todo_list_tasks", "update_task"]

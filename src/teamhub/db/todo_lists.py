"""Shared to-do list persistence helpers."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from teamhub.errors import NotFoundError
from teamhub.models.todos import TodoList
from teamhub.timeutils import utcnow

from .memberships import require_active_member
from .models import TodoListORM
from .repository import session_scope
from .teams import require_team
from .users import require_user


def _to_model(row: TodoListORM) -> TodoList:
    return TodoList.model_validate(
        {
            "id": row.id,
            "team_id": row.team_id,
            "name": row.name,
            "description": row.description,
            "created_by": row.created_by,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def require_todo_list(session: Session, todo_list_id: int) -> TodoListORM:
    row = session.get(TodoListORM, todo_list_id)
    if row is None:
        raise NotFoundError("Todo list", todo_list_id)
    return row


def create_todo_list(
    *,
    team_id: int,
    name: str,
    created_by: int,
    description: Optional[str] = None,
) -> TodoList:
    with session_scope() as session:
        require_team(session, team_id)
        require_user(session, created_by)
        require_active_member(session, team_id, created_by)
        now = utcnow()
        row = TodoListORM(
            team_id=team_id,
            name=name,
            description=description,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        session.add(row)
        session.flush()
        return _to_model(row)


def list_team_todo_lists(team_id: int) -> List[TodoList]:
    with session_scope() as session:
        rows = (
            session.execute(
                select(TodoListORM)
                .where(TodoListORM.team_id == team_id)
                .order_by(TodoListORM.id.asc())
            )
            .scalars()
            .all()
        )
        return [_to_model(row) for row in rows]


__all__ = ["create_todo_list", "list_team_todo_lists", "require_todo_list"]

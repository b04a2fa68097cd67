"""User account persistence helpers."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from teamhub.errors import DuplicateError, NotFoundError
from teamhub.models.users import User
from teamhub.timeutils import utcnow

from .models import UserORM
from .repository import session_scope

logger = logging.getLogger(__name__)

_UNSET = object()


def _to_model(row: UserORM) -> User:
    return User.model_validate(
        {
            "id": row.id,
            "email": row.email,
            "name": row.name,
            "tier": row.tier,
            "status": row.status,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def require_user(session: Session, user_id: int) -> UserORM:
    """Return the user row or raise :class:`NotFoundError`."""

    row = session.get(UserORM, user_id)
    if row is None:
        raise NotFoundError("User", user_id)
    return row


def _ensure_email_available(session: Session, email: str, exclude_id: int | None = None) -> None:
    stmt = select(UserORM.id).where(UserORM.email == email)
    if exclude_id is not None:
        stmt = stmt.where(UserORM.id != exclude_id)
    if session.execute(stmt).first() is not None:
        raise DuplicateError(f"User with email {email} already exists")


def create_user(
    *,
    email: str,
    name: str,
    tier: str = "free",
    status: str = "active",
) -> User:
    with session_scope() as session:
        _ensure_email_available(session, email)
        now = utcnow()
        row = UserORM(
            email=email,
            name=name,
            tier=tier,
            status=status,
            created_at=now,
            updated_at=now,
        )
        session.add(row)
        session.flush()
        logger.info("Created user id=%s tier=%s", row.id, row.tier)
        return _to_model(row)


def list_users() -> List[User]:
    """Return all users in id order."""

    with session_scope() as session:
        rows = session.execute(select(UserORM).order_by(UserORM.id.asc())).scalars().all()
        return [_to_model(row) for row in rows]


def get_user(user_id: int) -> User:
    with session_scope() as session:
        return _to_model(require_user(session, user_id))


def update_user(
    user_id: int,
    *,
    email: str | object = _UNSET,
    name: str | object = _UNSET,
    tier: str | object = _UNSET,
    status: str | object = _UNSET,
) -> User:
    with session_scope() as session:
        row = require_user(session, user_id)

        if email is not _UNSET:
            _ensure_email_available(session, str(email), exclude_id=user_id)
            row.email = str(email)
        if name is not _UNSET:
            row.name = str(name)
        if tier is not _UNSET:
            row.tier = str(tier)
        if status is not _UNSET:
            row.status = str(status)
        row.updated_at = utcnow()

        session.flush()
        return _to_model(row)


__all__ = ["create_user", "list_users", "get_user", "update_user", "require_user"]

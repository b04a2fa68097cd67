"""Team calendar persistence helpers."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select

from teamhub.errors import NotFoundError
from teamhub.models.events import CalendarEvent
from teamhub.timeutils import to_storage, utcnow

from .memberships import require_active_member
from .models import CalendarEventORM
from .repository import session_scope
from .teams import require_team
from .users import require_user

_UNSET = object()


def _to_model(row: CalendarEventORM) -> CalendarEvent:
    return CalendarEvent.model_validate(
        {
            "id": row.id,
            "team_id": row.team_id,
            "title": row.title,
            "description": row.description,
            "start_time": row.start_time,
            "end_time": row.end_time,
            "is_all_day": row.is_all_day,
            "location": row.location,
            "created_by": row.created_by,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def create_calendar_event(
    *,
    team_id: int,
    title: str,
    start_time: datetime,
    end_time: datetime,
    created_by: int,
    is_all_day: bool = False,
    description: Optional[str] = None,
    location: Optional[str] = None,
) -> CalendarEvent:
    with session_scope() as session:
        require_team(session, team_id)
        require_user(session, created_by)
        require_active_member(session, team_id, created_by)
        now = utcnow()
        row = CalendarEventORM(
            team_id=team_id,
            title=title,
            description=description,
            start_time=to_storage(start_time),
            end_time=to_storage(end_time),
            is_all_day=is_all_day,
            location=location,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        session.add(row)
        session.flush()
        return _to_model(row)


def list_team_calendar_events(
    team_id: int,
    *,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List[CalendarEvent]:
    """Return team events, latest start first.

    ``start_date`` keeps events starting at or after it; ``end_date`` keeps events
    ending at or before it. Both bounds are inclusive.
    """

    stmt = select(CalendarEventORM).where(CalendarEventORM.team_id == team_id)
    if start_date is not None:
        stmt = stmt.where(CalendarEventORM.start_time >= to_storage(start_date))
    if end_date is not None:
        stmt = stmt.where(CalendarEventORM.end_time <= to_storage(end_date))
    stmt = stmt.order_by(CalendarEventORM.start_time.desc(), CalendarEventORM.id.desc())

    with session_scope() as session:
        rows = session.execute(stmt).scalars().all()
        return [_to_model(row) for row in rows]


def update_calendar_event(
    event_id: int,
    *,
    title: str | object = _UNSET,
    description: str | None | object = _UNSET,
    start_time: datetime | object = _UNSET,
    end_time: datetime | object = _UNSET,
    is_all_day: bool | object = _UNSET,
    location: str | None | object = _UNSET,
) -> CalendarEvent:
    with session_scope() as session:
        row = session.get(CalendarEventORM, event_id)
        if row is None:
            raise NotFoundError("Calendar event", event_id)

        if title is not _UNSET:
            row.title = str(title)
        if description is not _UNSET:
            row.description = description  # type: ignore[assignment]
        if start_time is not _UNSET:
            row.start_time = to_storage(start_time)  # type: ignore[arg-type]
        if end_time is not _UNSET:
            row.end_time = to_storage(end_time)  # type: ignore[arg-type]
        if is_all_day is not _UNSET:
            row.is_all_day = bool(is_all_day)
        if location is not _UNSET:
            row.location = location  # type: ignore[assignment]
        row.updated_at = utcnow()

        session.flush()
        return _to_model(row)


__all__ = ["create_calendar_event", "list_team_calendar_events", "update_calendar_event"]

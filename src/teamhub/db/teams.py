"""Team persistence helpers."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from teamhub import metrics
from teamhub.errors import NotFoundError
from teamhub.models.teams import Team
from teamhub.timeutils import utcnow

from .models import TeamMembershipORM, TeamORM
from .repository import session_scope
from .users import require_user

logger = logging.getLogger(__name__)


def _to_model(row: TeamORM) -> Team:
    return Team.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "description": row.description,
            "created_by": row.created_by,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def require_team(session: Session, team_id: int) -> TeamORM:
    """Return the team row or raise :class:`NotFoundError`."""

    row = session.get(TeamORM, team_id)
    if row is None:
        raise NotFoundError("Team", team_id)
    return row


def create_team(*, name: str, created_by: int, description: Optional[str] = None) -> Team:
    """Create a team and enrol its creator as an active member in one transaction."""

    with session_scope() as session:
        require_user(session, created_by)
        now = utcnow()
        team = TeamORM(
            name=name,
            description=description,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        session.add(team)
        session.flush()

        session.add(
            TeamMembershipORM(
                team_id=team.id,
                user_id=created_by,
                status="active",
                joined_at=now,
                created_at=now,
            )
        )
        session.flush()
        metrics.MEMBERSHIP_TRANSITIONS.labels(status="active").inc()
        logger.info("Created team id=%s creator=%s", team.id, created_by)
        return _to_model(team)


def list_user_teams(user_id: int) -> List[Team]:
    """Return teams the user created or holds an active membership in, without duplicates."""

    active_team_ids = select(TeamMembershipORM.team_id).where(
        TeamMembershipORM.user_id == user_id,
        TeamMembershipORM.status == "active",
    )
    with session_scope() as session:
        rows = (
            session.execute(
                select(TeamORM)
                .where(or_(TeamORM.created_by == user_id, TeamORM.id.in_(active_team_ids)))
                .order_by(TeamORM.id.asc())
            )
            .scalars()
            .all()
        )
        unique: dict[int, Team] = {}
        for row in rows:
            unique.setdefault(row.id, _to_model(row))
        return list(unique.values())


def get_team(team_id: int) -> Team:
    with session_scope() as session:
        return _to_model(require_team(session, team_id))


__all__ = ["create_team", "list_user_teams", "get_team", "require_team"]

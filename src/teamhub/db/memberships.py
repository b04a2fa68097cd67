"""Team membership lifecycle: request, approval, and pending queue.

A membership row moves ``pending -> active`` through approval. ``rejected`` is a
terminal state with no transition into it exposed here. Only users holding an
``active`` membership of the same team may approve requests; team creators get
such a row when the team is created.
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from teamhub import metrics
from teamhub.errors import AuthorizationError, DuplicateError, NotFoundError, StateConflictError
from teamhub.models.teams import TeamMembership
from teamhub.timeutils import utcnow

from .models import TeamMembershipORM
from .repository import session_scope
from .teams import require_team
from .users import require_user

logger = logging.getLogger(__name__)


def _to_model(row: TeamMembershipORM) -> TeamMembership:
    return TeamMembership.model_validate(
        {
            "id": row.id,
            "team_id": row.team_id,
            "user_id": row.user_id,
            "status": row.status,
            "joined_at": row.joined_at,
            "created_at": row.created_at,
        }
    )


def find_membership(session: Session, team_id: int, user_id: int) -> TeamMembershipORM | None:
    return session.execute(
        select(TeamMembershipORM).where(
            TeamMembershipORM.team_id == team_id,
            TeamMembershipORM.user_id == user_id,
        )
    ).scalar_one_or_none()


def is_active_member(session: Session, team_id: int, user_id: int) -> bool:
    row = find_membership(session, team_id, user_id)
    return row is not None and row.status == "active"


def require_active_member(session: Session, team_id: int, user_id: int) -> None:
    """Raise :class:`AuthorizationError` unless the user is an active member of the team."""

    if not is_active_member(session, team_id, user_id):
        raise AuthorizationError(f"User {user_id} is not an active member of team {team_id}")


def request_membership(*, team_id: int, user_id: int) -> TeamMembership:
    """Create a pending membership request for the user.

    Any existing row for the pair, whatever its status, blocks a new request.
    """

    with session_scope() as session:
        require_team(session, team_id)
        require_user(session, user_id)

        existing = find_membership(session, team_id, user_id)
        if existing is not None:
            raise DuplicateError(
                f"User {user_id} already has a membership for team {team_id} "
                f"(status={existing.status})"
            )

        row = TeamMembershipORM(
            team_id=team_id,
            user_id=user_id,
            status="pending",
            joined_at=None,
            created_at=utcnow(),
        )
        session.add(row)
        session.flush()
        metrics.MEMBERSHIP_TRANSITIONS.labels(status="pending").inc()
        logger.info("Membership requested id=%s team=%s user=%s", row.id, team_id, user_id)
        return _to_model(row)


def approve_membership(*, membership_id: int, approver_id: int) -> TeamMembership:
    """Activate a pending membership on behalf of an active member of the same team."""

    with session_scope() as session:
        row = session.get(TeamMembershipORM, membership_id)
        if row is None:
            raise NotFoundError("Membership request", membership_id)
        if row.status != "pending":
            raise StateConflictError(
                f"Membership request is not pending (id={membership_id}, status={row.status})"
            )
        if not is_active_member(session, row.team_id, approver_id):
            raise AuthorizationError(
                f"Approver must be an active member of the team (approver={approver_id}, "
                f"team={row.team_id})"
            )

        row.status = "active"
        row.joined_at = utcnow()
        session.flush()
        metrics.MEMBERSHIP_TRANSITIONS.labels(status="active").inc()
        logger.info(
            "Membership approved id=%s team=%s user=%s approver=%s",
            row.id,
            row.team_id,
            row.user_id,
            approver_id,
        )
        return _to_model(row)


def list_pending_memberships(team_id: int) -> List[TeamMembership]:
    with session_scope() as session:
        rows = (
            session.execute(
                select(TeamMembershipORM)
                .where(
                    TeamMembershipORM.team_id == team_id,
                    TeamMembershipORM.status == "pending",
                )
                .order_by(TeamMembershipORM.created_at.asc(), TeamMembershipORM.id.asc())
            )
            .scalars()
            .all()
        )
        return [_to_model(row) for row in rows]


__all__ = [
    "request_membership",
    "approve_membership",
    "list_pending_memberships",
    "require_active_member",
    "is_active_member",
    "find_membership",
]

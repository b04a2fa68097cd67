"""Unit tests for the membership lifecycle."""

from __future__ import annotations

import pytest

from teamhub.db.memberships import (
    approve_membership,
    list_pending_memberships,
    request_membership,
)
from teamhub.db.models import TeamMembershipORM
from teamhub.db.repository import session_scope
from teamhub.db.teams import create_team
from teamhub.db.users import create_user
from teamhub.errors import AuthorizationError, DuplicateError, NotFoundError, StateConflictError


def _insert_membership(team_id: int, user_id: int, status: str) -> int:
    with session_scope() as session:
        row = TeamMembershipORM(team_id=team_id, user_id=user_id, status=status)
        session.add(row)
        session.flush()
        return row.id


def test_request_creates_pending_membership(owner, member):
    team = create_team(name="Crew", created_by=owner.id)

    membership = request_membership(team_id=team.id, user_id=member.id)

    assert membership.team_id == team.id
    assert membership.user_id == member.id
    assert membership.status == "pending"
    assert membership.joined_at is None


def test_request_for_missing_team(member):
    with pytest.raises(NotFoundError, match="Team with id 777 not found"):
        request_membership(team_id=777, user_id=member.id)


def test_request_for_missing_user(owner):
    team = create_team(name="Crew", created_by=owner.id)

    with pytest.raises(NotFoundError, match="User with id 555 not found"):
        request_membership(team_id=team.id, user_id=555)


@pytest.mark.parametrize("existing_status", ["pending", "active", "rejected"])
def test_request_rejected_when_membership_exists(owner, member, existing_status):
    team = create_team(name="Crew", created_by=owner.id)
    _insert_membership(team.id, member.id, existing_status)

    with pytest.raises(DuplicateError, match="already has a membership"):
        request_membership(team_id=team.id, user_id=member.id)


def test_creator_cannot_request_own_team(owner):
    team = create_team(name="Crew", created_by=owner.id)

    with pytest.raises(DuplicateError, match="already has a membership"):
        request_membership(team_id=team.id, user_id=owner.id)


def test_active_member_approves_pending_request(owner, member):
    team = create_team(name="Crew", created_by=owner.id)
    request = request_membership(team_id=team.id, user_id=member.id)

    approved = approve_membership(membership_id=request.id, approver_id=owner.id)

    assert approved.id == request.id
    assert approved.status == "active"
    assert approved.joined_at is not None
    assert list_pending_memberships(team.id) == []


def test_approve_missing_membership(owner):
    with pytest.raises(NotFoundError, match="Membership request with id 31337 not found"):
        approve_membership(membership_id=31337, approver_id=owner.id)


def test_approve_non_pending_membership(owner, member):
    team = create_team(name="Crew", created_by=owner.id)
    request = request_membership(team_id=team.id, user_id=member.id)
    approve_membership(membership_id=request.id, approver_id=owner.id)

    with pytest.raises(StateConflictError, match="Membership request is not pending"):
        approve_membership(membership_id=request.id, approver_id=owner.id)


def test_approve_rejected_membership(owner, member):
    team = create_team(name="Crew", created_by=owner.id)
    membership_id = _insert_membership(team.id, member.id, "rejected")

    with pytest.raises(StateConflictError):
        approve_membership(membership_id=membership_id, approver_id=owner.id)


def test_pending_member_cannot_approve(owner, member, outsider):
    team = create_team(name="Crew", created_by=owner.id)
    request_membership(team_id=team.id, user_id=member.id)
    other = request_membership(team_id=team.id, user_id=outsider.id)

    with pytest.raises(AuthorizationError, match="Approver must be an active member of the team"):
        approve_membership(membership_id=other.id, approver_id=member.id)


def test_active_member_of_other_team_cannot_approve(owner, member, outsider):
    team = create_team(name="Crew", created_by=owner.id)
    create_team(name="Elsewhere", created_by=outsider.id)
    request = request_membership(team_id=team.id, user_id=member.id)

    with pytest.raises(AuthorizationError):
        approve_membership(membership_id=request.id, approver_id=outsider.id)

    assert [row.id for row in list_pending_memberships(team.id)] == [request.id]


def test_list_pending_filters_by_team_and_status(owner, member, outsider):
    team = create_team(name="Crew", created_by=owner.id)
    other_team = create_team(name="Other", created_by=outsider.id)
    late = create_user(email="late@example.com", name="Late")

    first = request_membership(team_id=team.id, user_id=member.id)
    second = request_membership(team_id=team.id, user_id=late.id)
    request_membership(team_id=other_team.id, user_id=member.id)
    approve_membership(membership_id=second.id, approver_id=owner.id)

    pending = list_pending_memberships(team.id)
    assert [row.id for row in pending] == [first.id]
    assert all(row.status == "pending" for row in pending)

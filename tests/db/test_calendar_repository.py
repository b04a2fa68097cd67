"""Unit tests for team calendar events."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from teamhub.db.calendar_events import (
    create_calendar_event,
    list_team_calendar_events,
    update_calendar_event,
)
from teamhub.db.teams import create_team
from teamhub.errors import AuthorizationError, NotFoundError

BASE = datetime(2030, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def team(owner):
    return create_team(name="Family", created_by=owner.id)


def _event(team_id, owner_id, title, start_offset_days, duration_hours=1):
    start = BASE + timedelta(days=start_offset_days)
    return create_calendar_event(
        team_id=team_id,
        title=title,
        start_time=start,
        end_time=start + timedelta(hours=duration_hours),
        created_by=owner_id,
    )


def test_create_event_defaults(owner, team):
    event = _event(team.id, owner.id, "Dentist", 0)

    assert event.is_all_day is False
    assert event.location is None
    assert event.description is None
    assert event.start_time == BASE
    assert event.end_time == BASE + timedelta(hours=1)


def test_create_event_normalises_aware_times_to_utc(owner, team):
    start = datetime(2030, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=1)))
    event = create_calendar_event(
        team_id=team.id,
        title="Call",
        start_time=start,
        end_time=start + timedelta(minutes=30),
        created_by=owner.id,
    )

    assert event.start_time == datetime(2030, 3, 1, 9, 0, tzinfo=timezone.utc)


def test_create_event_for_missing_team(owner):
    with pytest.raises(NotFoundError, match="Team with id 4242 not found"):
        _event(4242, owner.id, "Nowhere", 0)


def test_create_event_requires_active_membership(team, outsider):
    with pytest.raises(AuthorizationError):
        _event(team.id, outsider.id, "Party crash", 0)


def test_list_events_latest_start_first(owner, team):
    early = _event(team.id, owner.id, "Early", 0)
    late = _event(team.id, owner.id, "Late", 5)
    middle = _event(team.id, owner.id, "Middle", 2)

    assert [event.id for event in list_team_calendar_events(team.id)] == [late.id, middle.id, early.id]


def test_list_events_start_date_filter_is_inclusive(owner, team):
    _event(team.id, owner.id, "Before", 0)
    on_bound = _event(team.id, owner.id, "On bound", 2)
    after = _event(team.id, owner.id, "After", 4)

    events = list_team_calendar_events(team.id, start_date=BASE + timedelta(days=2))

    assert [event.id for event in events] == [after.id, on_bound.id]


def test_list_events_end_date_filter_is_inclusive(owner, team):
    first = _event(team.id, owner.id, "First", 0)
    second = _event(team.id, owner.id, "Second", 2)
    _event(team.id, owner.id, "Third", 4)

    end_bound = BASE + timedelta(days=2, hours=1)
    events = list_team_calendar_events(team.id, end_date=end_bound)

    assert [event.id for event in events] == [second.id, first.id]


def test_list_events_with_both_bounds(owner, team):
    _event(team.id, owner.id, "Too early", 0)
    inside = _event(team.id, owner.id, "Inside", 3)
    _event(team.id, owner.id, "Spills over", 5, duration_hours=72)

    events = list_team_calendar_events(
        team.id,
        start_date=BASE + timedelta(days=1),
        end_date=BASE + timedelta(days=6),
    )

    assert [event.title for event in events] == ["Inside"]
    assert events[0].id == inside.id


def test_list_events_scoped_to_team(owner, outsider, team):
    other = create_team(name="Elsewhere", created_by=outsider.id)
    _event(other.id, outsider.id, "Not ours", 1)
    ours = _event(team.id, owner.id, "Ours", 1)

    assert [event.id for event in list_team_calendar_events(team.id)] == [ours.id]


def test_update_event_partial(owner, team):
    event = create_calendar_event(
        team_id=team.id,
        title="Picnic",
        start_time=BASE,
        end_time=BASE + timedelta(hours=3),
        location="Park",
        description="Bring blankets",
        created_by=owner.id,
    )

    updated = update_calendar_event(event.id, location=None, is_all_day=True)

    assert updated.location is None
    assert updated.is_all_day is True
    assert updated.title == "Picnic"
    assert updated.description == "Bring blankets"
    assert updated.start_time == BASE
    assert updated.updated_at >= event.updated_at


def test_update_missing_event():
    with pytest.raises(NotFoundError, match="Calendar event with id 99999 not found"):
        update_calendar_event(99999, title="Ghost")

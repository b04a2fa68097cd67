"""Unit tests for the user repository helpers."""

from __future__ import annotations

import pytest

from teamhub.db.users import create_user, list_users, update_user
from teamhub.errors import DuplicateError, NotFoundError


def test_create_user_applies_defaults():
    user = create_user(email="ada@example.com", name="Ada")

    assert user.id > 0
    assert user.email == "ada@example.com"
    assert user.name == "Ada"
    assert user.tier == "free"
    assert user.status == "active"
    assert user.created_at == user.updated_at


def test_create_user_with_explicit_tier_and_status():
    user = create_user(email="paid@example.com", name="Paid", tier="paid", status="suspended")

    assert user.tier == "paid"
    assert user.status == "suspended"


def test_duplicate_email_rejected():
    create_user(email="dup@example.com", name="First")

    with pytest.raises(DuplicateError, match="already exists"):
        create_user(email="dup@example.com", name="Second")


def test_list_users_in_creation_order():
    create_user(email="c@example.com", name="C")
    create_user(email="a@example.com", name="A")
    create_user(email="b@example.com", name="B")

    users = list_users()
    assert [user.name for user in users] == ["C", "A", "B"]
    assert [user.id for user in users] == sorted(user.id for user in users)


def test_update_user_changes_only_supplied_fields():
    user = create_user(email="grace@example.com", name="Grace")

    updated = update_user(user.id, tier="paid")
    assert updated.tier == "paid"
    assert updated.name == "Grace"
    assert updated.email == "grace@example.com"
    assert updated.status == "active"
    assert updated.updated_at >= user.updated_at


def test_update_user_email_conflict():
    create_user(email="taken@example.com", name="Taken")
    user = create_user(email="free@example.com", name="Free")

    with pytest.raises(DuplicateError):
        update_user(user.id, email="taken@example.com")


def test_update_missing_user_raises():
    with pytest.raises(NotFoundError, match="User with id 99999 not found"):
        update_user(99999, name="Nobody")

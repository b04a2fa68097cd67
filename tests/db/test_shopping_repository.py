"""Unit tests for team shopping lists and items."""

from __future__ import annotations

import pytest

from teamhub.db.shopping_items import (
    create_shopping_item,
    list_shopping_list_items,
    update_shopping_item,
)
from teamhub.db.shopping_lists import create_shopping_list, list_team_shopping_lists
from teamhub.db.teams import create_team
from teamhub.errors import AuthorizationError, NotFoundError


@pytest.fixture()
def shopping_list(owner):
    team = create_team(name="Flat", created_by=owner.id)
    return create_shopping_list(team_id=team.id, name="Groceries", created_by=owner.id)


def test_create_shopping_list_requires_existing_team(owner):
    with pytest.raises(NotFoundError, match="Team with id 9999 not found"):
        create_shopping_list(team_id=9999, name="Ghost", created_by=owner.id)


def test_create_shopping_list_requires_active_membership(owner, outsider):
    team = create_team(name="Flat", created_by=owner.id)

    with pytest.raises(AuthorizationError, match=r"User \d+ is not an active member of team \d+"):
        create_shopping_list(team_id=team.id, name="Intruder", created_by=outsider.id)


def test_list_team_shopping_lists(owner, outsider):
    team = create_team(name="Flat", created_by=owner.id)
    other = create_team(name="Other flat", created_by=outsider.id)
    groceries = create_shopping_list(team_id=team.id, name="Groceries", created_by=owner.id)
    create_shopping_list(team_id=other.id, name="Theirs", created_by=outsider.id)

    lists = list_team_shopping_lists(team.id)
    assert [entry.id for entry in lists] == [groceries.id]
    assert lists[0].description is None


def test_create_item_defaults(owner, shopping_list):
    item = create_shopping_item(shopping_list_id=shopping_list.id, name="Milk", created_by=owner.id)

    assert item.quantity == 1
    assert item.comment is None
    assert item.is_purchased is False
    assert item.purchased_by is None
    assert item.purchased_at is None


def test_create_item_for_missing_list(owner):
    with pytest.raises(NotFoundError, match="Shopping list with id 99999 not found"):
        create_shopping_item(shopping_list_id=99999, name="Bread", created_by=owner.id)


def test_update_quantity_leaves_other_fields(owner, shopping_list):
    item = create_shopping_item(
        shopping_list_id=shopping_list.id,
        name="Eggs",
        comment="Free range",
        created_by=owner.id,
    )

    updated = update_shopping_item(item.id, acting_user_id=owner.id, quantity=5)

    assert updated.quantity == 5
    assert updated.name == "Eggs"
    assert updated.comment == "Free range"
    assert updated.is_purchased is False


def test_purchase_toggle_sets_and_clears_attribution(owner, member, shopping_list):
    item = create_shopping_item(shopping_list_id=shopping_list.id, name="Rice", created_by=owner.id)

    purchased = update_shopping_item(item.id, acting_user_id=member.id, is_purchased=True)
    assert purchased.is_purchased is True
    assert purchased.purchased_by == member.id
    assert purchased.purchased_at is not None

    reset = update_shopping_item(item.id, acting_user_id=owner.id, is_purchased=False)
    assert reset.is_purchased is False
    assert reset.purchased_by is None
    assert reset.purchased_at is None


def test_unrelated_update_preserves_purchase_attribution(owner, member, shopping_list):
    item = create_shopping_item(shopping_list_id=shopping_list.id, name="Tea", created_by=owner.id)
    purchased = update_shopping_item(item.id, acting_user_id=member.id, is_purchased=True)

    renamed = update_shopping_item(item.id, acting_user_id=owner.id, name="Green tea")

    assert renamed.name == "Green tea"
    assert renamed.is_purchased is True
    assert renamed.purchased_by == member.id
    assert renamed.purchased_at == purchased.purchased_at


def test_list_items_scoped_to_list(owner, shopping_list):
    other = create_shopping_list(team_id=shopping_list.team_id, name="Hardware", created_by=owner.id)
    milk = create_shopping_item(shopping_list_id=shopping_list.id, name="Milk", created_by=owner.id)
    create_shopping_item(shopping_list_id=other.id, name="Nails", created_by=owner.id)
    bread = create_shopping_item(shopping_list_id=shopping_list.id, name="Bread", created_by=owner.id)

    assert [item.id for item in list_shopping_list_items(shopping_list.id)] == [milk.id, bread.id]


def test_update_missing_item():
    with pytest.raises(NotFoundError, match="Shopping item with id 99999 not found"):
        update_shopping_item(99999, acting_user_id=1, name="nope")


def test_create_item_for_missing_creator(shopping_list):
    with pytest.raises(NotFoundError, match="User with id 99999 not found"):
        create_shopping_item(shopping_list_id=shopping_list.id, name="Ghost", created_by=99999)


def test_purchase_by_missing_user_is_rejected(owner, shopping_list):
    item = create_shopping_item(shopping_list_id=shopping_list.id, name="Jam", created_by=owner.id)

    with pytest.raises(NotFoundError, match="User with id 99999 not found"):
        update_shopping_item(item.id, acting_user_id=99999, is_purchased=True)

    assert list_shopping_list_items(shopping_list.id)[0].is_purchased is False

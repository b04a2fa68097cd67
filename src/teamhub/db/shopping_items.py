"""Shopping item persistence helpers."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from teamhub.errors import NotFoundError
from teamhub.models.shopping import ShoppingItem
from teamhub.timeutils import utcnow

from .models import ShoppingItemORM
from .repository import session_scope
from .shopping_lists import require_shopping_list
from .users import require_user

_UNSET = object()


def _to_model(row: ShoppingItemORM) -> ShoppingItem:
    return ShoppingItem.model_validate(
        {
            "id": row.id,
            "shopping_list_id": row.shopping_list_id,
            "name": row.name,
            "quantity": row.quantity,
            "comment": row.comment,
            "is_purchased": row.is_purchased,
            "purchased_by": row.purchased_by,
            "purchased_at": row.purchased_at,
            "created_by": row.created_by,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def create_shopping_item(
    *,
    shopping_list_id: int,
    name: str,
    created_by: int,
    quantity: int = 1,
    comment: Optional[str] = None,
) -> ShoppingItem:
    with session_scope() as session:
        require_shopping_list(session, shopping_list_id)
        require_user(session, created_by)
        now = utcnow()
        row = ShoppingItemORM(
            shopping_list_id=shopping_list_id,
            name=name,
            quantity=int(quantity),
            comment=comment,
            is_purchased=False,
            purchased_by=None,
            purchased_at=None,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        session.add(row)
        session.flush()
        return _to_model(row)


def list_shopping_list_items(shopping_list_id: int) -> List[ShoppingItem]:
    with session_scope() as session:
        rows = (
            session.execute(
                select(ShoppingItemORM)
                .where(ShoppingItemORM.shopping_list_id == shopping_list_id)
                .order_by(ShoppingItemORM.id.asc())
            )
            .scalars()
            .all()
        )
        return [_to_model(row) for row in rows]


def update_shopping_item(
    item_id: int,
    *,
    acting_user_id: int,
    name: str | object = _UNSET,
    quantity: int | object = _UNSET,
    comment: str | None | object = _UNSET,
    is_purchased: bool | object = _UNSET,
) -> ShoppingItem:
    """Apply a partial update.

    Writing ``is_purchased`` stamps or clears the purchase attribution; other
    field updates leave it untouched.
    """

    with session_scope() as session:
        row = session.get(ShoppingItemORM, item_id)
        if row is None:
            raise NotFoundError("Shopping item", item_id)

        now = utcnow()
        if name is not _UNSET:
            row.name = str(name)
        if quantity is not _UNSET:
            row.quantity = int(quantity)  # type: ignore[call-overload]
        if comment is not _UNSET:
            row.comment = comment  # type: ignore[assignment]
        if is_purchased is not _UNSET:
            if is_purchased:
                require_user(session, acting_user_id)
            row.is_purchased = bool(is_purchased)
            if row.is_purchased:
                row.purchased_by = acting_user_id
                row.purchased_at = now
            else:
                row.purchased_by = None
                row.purchased_at = None
        row.updated_at = now

        session.flush()
        return _to_model(row)


__all__ = ["create_shopping_item", "list_shopping_list_items", "update_shopping_item"]

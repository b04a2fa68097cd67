"""Feature flag persistence and tier gating."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select

from teamhub.errors import NotFoundError
from teamhub.models.features import Feature
from teamhub.timeutils import utcnow

from .models import FeatureORM
from .repository import session_scope
from .users import require_user

logger = logging.getLogger(__name__)

_UNSET = object()

DEFAULT_FEATURES: tuple[tuple[str, str, bool, bool], ...] = (
    ("todo_lists", "Shared to-do lists with task assignment", True, True),
    ("shopping_lists", "Shared shopping lists with purchase tracking", True, True),
    ("calendar", "Shared team calendar", False, True),
    ("team_invites", "Membership requests and approvals", True, True),
)


def is_feature_enabled(feature: Feature, tier: str) -> bool:
    """Return whether ``feature`` is available to users on ``tier``."""

    if tier == "paid":
        return feature.is_enabled_paid
    if tier == "free":
        return feature.is_enabled_free
    raise ValueError(f"Unknown tier '{tier}'")


def enabled_feature_names(features: Iterable[Feature], tier: str) -> List[str]:
    return [feature.name for feature in features if is_feature_enabled(feature, tier)]


def _to_model(row: FeatureORM) -> Feature:
    return Feature.model_validate(
        {
            "id": row.id,
            "name": row.name,
            "description": row.description,
            "is_enabled_free": row.is_enabled_free,
            "is_enabled_paid": row.is_enabled_paid,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }
    )


def list_features() -> List[Feature]:
    with session_scope() as session:
        rows = session.execute(select(FeatureORM).order_by(FeatureORM.id.asc())).scalars().all()
        return [_to_model(row) for row in rows]


def create_feature(
    *,
    name: str,
    description: Optional[str] = None,
    is_enabled_free: bool = True,
    is_enabled_paid: bool = True,
) -> Feature:
    with session_scope() as session:
        now = utcnow()
        row = FeatureORM(
            name=name,
            description=description,
            is_enabled_free=is_enabled_free,
            is_enabled_paid=is_enabled_paid,
            created_at=now,
            updated_at=now,
        )
        session.add(row)
        session.flush()
        return _to_model(row)


def seed_features() -> List[Feature]:
    """Insert the default catalogue entries that are not present yet; return the new rows."""

    created: List[Feature] = []
    with session_scope() as session:
        existing = set(session.execute(select(FeatureORM.name)).scalars().all())
        now = utcnow()
        for name, description, free, paid in DEFAULT_FEATURES:
            if name in existing:
                continue
            row = FeatureORM(
                name=name,
                description=description,
                is_enabled_free=free,
                is_enabled_paid=paid,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            session.flush()
            created.append(_to_model(row))
    if created:
        logger.info("Seeded %s feature flag(s)", len(created))
    return created


def update_feature(
    feature_id: int,
    *,
    is_enabled_free: bool | object = _UNSET,
    is_enabled_paid: bool | object = _UNSET,
) -> Feature:
    with session_scope() as session:
        row = session.get(FeatureORM, feature_id)
        if row is None:
            raise NotFoundError("Feature", feature_id)

        if is_enabled_free is not _UNSET:
            row.is_enabled_free = bool(is_enabled_free)
        if is_enabled_paid is not _UNSET:
            row.is_enabled_paid = bool(is_enabled_paid)
        row.updated_at = utcnow()

        session.flush()
        logger.info(
            "Feature %s toggled free=%s paid=%s",
            row.name,
            row.is_enabled_free,
            row.is_enabled_paid,
        )
        return _to_model(row)


def list_enabled_features_for_user(user_id: int) -> List[str]:
    """Return names of features enabled for the user's tier."""

    with session_scope() as session:
        tier = require_user(session, user_id).tier
    return enabled_feature_names(list_features(), tier)


__all__ = [
    "DEFAULT_FEATURES",
    "is_feature_enabled",
    "enabled_feature_names",
    "list_features",
    "create_feature",
    "seed_features",
    "update_feature",
    "list_enabled_features_for_user",
]

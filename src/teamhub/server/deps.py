"""Dependency definitions for the TeamHub API server."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from fastapi import Depends, HTTPException, Request, status

from teamhub.config import Settings, get_settings
from teamhub.db.calendar_events import (
    create_calendar_event,
    list_team_calendar_events,
    update_calendar_event,
)
from teamhub.db.features import list_enabled_features_for_user, list_features, update_feature
from teamhub.db.memberships import (
    approve_membership,
    list_pending_memberships,
    request_membership,
)
from teamhub.db.shopping_items import (
    create_shopping_item,
    list_shopping_list_items,
    update_shopping_item,
)
from teamhub.db.shopping_lists import create_shopping_list, list_team_shopping_lists
from teamhub.db.tasks import create_task, list_todo_list_tasks, update_task
from teamhub.db.teams import create_team, list_user_teams
from teamhub.db.todo_lists import create_todo_list, list_team_todo_lists
from teamhub.db.users import create_user, list_users, update_user
from teamhub.models import (
    CalendarEvent,
    Feature,
    ShoppingItem,
    ShoppingList,
    Task,
    Team,
    TeamMembership,
    TodoList,
    User,
)


@dataclass(frozen=True)
class CallerContext:
    """Identity of the authenticated caller, resolved per request."""

    user_id: int


UserCreator = Callable[[dict], User]
UserListProvider = Callable[[], List[User]]
UserUpdater = Callable[[int, dict], User]
TeamCreator = Callable[[dict, int], Team]
UserTeamsProvider = Callable[[int], List[Team]]
MembershipRequester = Callable[[int, int], TeamMembership]
MembershipApprover = Callable[[int, int], TeamMembership]
PendingMembershipsProvider = Callable[[int], List[TeamMembership]]
TodoListCreator = Callable[[dict, int], TodoList]
TodoListProvider = Callable[[int], List[TodoList]]
TaskCreator = Callable[[dict, int], Task]
TaskProvider = Callable[[int], List[Task]]
TaskUpdater = Callable[[int, dict], Task]
ShoppingListCreator = Callable[[dict, int], ShoppingList]
ShoppingListProvider = Callable[[int], List[ShoppingList]]
ShoppingItemCreator = Callable[[dict, int], ShoppingItem]
ShoppingItemProvider = Callable[[int], List[ShoppingItem]]
ShoppingItemUpdater = Callable[[int, dict, int], ShoppingItem]
CalendarEventCreator = Callable[[dict, int], CalendarEvent]
CalendarEventProvider = Callable[[int, Optional[datetime], Optional[datetime]], List[CalendarEvent]]
CalendarEventUpdater = Callable[[int, dict], CalendarEvent]
FeatureProvider = Callable[[], List[Feature]]
FeatureUpdater = Callable[[int, dict], Feature]
EnabledFeaturesProvider = Callable[[int], List[str]]


def get_user_creator() -> UserCreator:
    return lambda payload: create_user(**payload)


def get_user_list_provider() -> UserListProvider:
    return list_users


def get_user_updater() -> UserUpdater:
    return lambda user_id, payload: update_user(user_id, **payload)


def get_team_creator() -> TeamCreator:
    return lambda payload, caller_id: create_team(created_by=caller_id, **payload)


def get_user_teams_provider() -> UserTeamsProvider:
    return list_user_teams


def get_membership_requester() -> MembershipRequester:
    return lambda team_id, caller_id: request_membership(team_id=team_id, user_id=caller_id)


def get_membership_approver() -> MembershipApprover:
    return lambda membership_id, caller_id: approve_membership(
        membership_id=membership_id,
        approver_id=caller_id,
    )


def get_pending_memberships_provider() -> PendingMembershipsProvider:
    return list_pending_memberships


def get_todo_list_creator() -> TodoListCreator:
    return lambda payload, caller_id: create_todo_list(created_by=caller_id, **payload)


def get_todo_list_provider() -> TodoListProvider:
    return list_team_todo_lists


def get_task_creator() -> TaskCreator:
    return lambda payload, caller_id: create_task(created_by=caller_id, **payload)


def get_task_provider() -> TaskProvider:
    return list_todo_list_tasks


def get_task_updater() -> TaskUpdater:
    return lambda task_id, payload: update_task(task_id, **payload)


def get_shopping_list_creator() -> ShoppingListCreator:
    return lambda payload, caller_id: create_shopping_list(created_by=caller_id, **payload)


def get_shopping_list_provider() -> ShoppingListProvider:
    return list_team_shopping_lists


def get_shopping_item_creator() -> ShoppingItemCreator:
    return lambda payload, caller_id: create_shopping_item(created_by=caller_id, **payload)


def get_shopping_item_provider() -> ShoppingItemProvider:
    return list_shopping_list_items


def get_shopping_item_updater() -> ShoppingItemUpdater:
    return lambda item_id, payload, caller_id: update_shopping_item(
        item_id,
        acting_user_id=caller_id,
        **payload,
    )


def get_calendar_event_creator() -> CalendarEventCreator:
    return lambda payload, caller_id: create_calendar_event(created_by=caller_id, **payload)


def get_calendar_event_provider() -> CalendarEventProvider:
    return lambda team_id, start_date, end_date: list_team_calendar_events(
        team_id,
        start_date=start_date,
        end_date=end_date,
    )


def get_calendar_event_updater() -> CalendarEventUpdater:
    return lambda event_id, payload: update_calendar_event(event_id, **payload)


def get_feature_provider() -> FeatureProvider:
    return list_features


def get_feature_updater() -> FeatureUpdater:
    return lambda feature_id, payload: update_feature(feature_id, **payload)


def get_enabled_features_provider() -> EnabledFeaturesProvider:
    return list_enabled_features_for_user


def require_api_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    if request.query_params.get("api_token") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_caller(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> CallerContext:
    """Resolve the caller's user id from the identity header set by the auth proxy."""

    raw = request.headers.get(settings.caller_header)
    if raw is None or not raw.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {settings.caller_header} header",
        )
    try:
        user_id = int(raw.strip())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid {settings.caller_header} header",
        ) from exc
    if user_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid {settings.caller_header} header",
        )
    request.state.caller_id = user_id
    return CallerContext(user_id=user_id)

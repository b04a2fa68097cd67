"""ASGI application for TeamHub."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from teamhub import __version__, metrics
from teamhub.config import Settings, get_settings
from teamhub.errors import (
    AuthorizationError,
    DuplicateError,
    NotFoundError,
    ReferentialIntegrityError,
    StateConflictError,
    TeamHubError,
)
from teamhub.logging_utils import configure_logging as configure_app_logging
from teamhub.models import (
    CalendarEvent,
    CalendarEventCreateRequest,
    CalendarEventUpdateRequest,
    Feature,
    FeatureUpdateRequest,
    MembershipRequest,
    ShoppingItem,
    ShoppingItemCreateRequest,
    ShoppingItemUpdateRequest,
    ShoppingList,
    ShoppingListCreateRequest,
    Task,
    TaskCreateRequest,
    TaskUpdateRequest,
    Team,
    TeamCreateRequest,
    TeamMembership,
    TodoList,
    TodoListCreateRequest,
    User,
    UserCreateRequest,
    UserUpdateRequest,
)
from teamhub.server import deps

logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[TeamHubError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StateConflictError: status.HTTP_409_CONFLICT,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    DuplicateError: status.HTTP_409_CONFLICT,
    ReferentialIntegrityError: status.HTTP_409_CONFLICT,
}


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    if isinstance(value, Exception):
        return str(value)
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _status_for(exc: TeamHubError) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _log_extra(request: Request) -> dict[str, Any]:
    extra: dict[str, Any] = {}
    if request_id := getattr(request.state, "request_id", None):
        extra["request_id"] = request_id
    if caller_id := getattr(request.state, "caller_id", None):
        extra["caller_id"] = caller_id
    return extra


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.api_token or ""])


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="TeamHub", version=__version__)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("teamhub.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details without leaking sensitive data."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            path = request.url.path
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(
                    duration_ms / 1000.0
                )
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        body_preview: str | None = None
        try:
            raw_body = await request.body()
            if raw_body:
                decoded = raw_body.decode("utf-8", errors="replace")
                if len(decoded) > 2048:
                    decoded = decoded[:2048] + "...(truncated)"
                body_preview = decoded
        except Exception:
            body_preview = "<unable to read body>"

        logger.warning(
            "Validation error on %s %s: %s | body=%s",
            request.method,
            request.url.path,
            exc.errors(),
            body_preview,
            extra=_log_extra(request),
        )
        metrics.DOMAIN_ERRORS.labels(kind="validation").inc()
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.exception_handler(TeamHubError)
    async def domain_exception_handler(request: Request, exc: TeamHubError):
        status_code = _status_for(exc)
        logger.warning(
            "Rejected %s %s (%s): %s",
            request.method,
            request.url.path,
            exc.kind,
            exc,
            extra=_log_extra(request),
        )
        metrics.DOMAIN_ERRORS.labels(kind=exc.kind).inc()
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @application.get("/healthz", summary="Liveness probe")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Users

    @application.post(
        "/users",
        response_model=User,
        status_code=status.HTTP_201_CREATED,
        summary="Create user",
    )
    def users_create(
        payload: UserCreateRequest,
        auth: None = Depends(deps.require_api_token),
        creator: deps.UserCreator = Depends(deps.get_user_creator),
    ) -> User:
        return creator(payload.model_dump())

    @application.get("/users", response_model=list[User], summary="List users")
    def users_list(
        provider: deps.UserListProvider = Depends(deps.get_user_list_provider),
    ) -> list[User]:
        return provider()

    @application.patch("/users/{user_id}", response_model=User, summary="Update user")
    def users_update(
        user_id: int,
        payload: UserUpdateRequest,
        auth: None = Depends(deps.require_api_token),
        updater: deps.UserUpdater = Depends(deps.get_user_updater),
    ) -> User:
        changes = payload.changes()
        logger.debug("Updating user %s with payload=%s", user_id, changes)
        return updater(user_id, changes)

    # Teams and membership

    @application.post(
        "/teams",
        response_model=Team,
        status_code=status.HTTP_201_CREATED,
        summary="Create team and enrol the caller",
    )
    def teams_create(
        payload: TeamCreateRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        creator: deps.TeamCreator = Depends(deps.get_team_creator),
    ) -> Team:
        return creator(payload.model_dump(), caller.user_id)

    @application.get("/teams", response_model=list[Team], summary="List the caller's teams")
    def teams_list(
        caller: deps.CallerContext = Depends(deps.get_caller),
        provider: deps.UserTeamsProvider = Depends(deps.get_user_teams_provider),
    ) -> list[Team]:
        return provider(caller.user_id)

    @application.post(
        "/memberships",
        response_model=TeamMembership,
        status_code=status.HTTP_201_CREATED,
        summary="Request membership of a team",
    )
    def memberships_request(
        payload: MembershipRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        requester: deps.MembershipRequester = Depends(deps.get_membership_requester),
    ) -> TeamMembership:
        return requester(payload.team_id, caller.user_id)

    @application.post(
        "/memberships/{membership_id}/approve",
        response_model=TeamMembership,
        summary="Approve a pending membership request",
    )
    def memberships_approve(
        membership_id: int,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        approver: deps.MembershipApprover = Depends(deps.get_membership_approver),
    ) -> TeamMembership:
        return approver(membership_id, caller.user_id)

    @application.get(
        "/teams/{team_id}/memberships/pending",
        response_model=list[TeamMembership],
        summary="List pending membership requests",
    )
    def memberships_pending(
        team_id: int,
        provider: deps.PendingMembershipsProvider = Depends(deps.get_pending_memberships_provider),
    ) -> list[TeamMembership]:
        return provider(team_id)

    # To-do lists and tasks

    @application.post(
        "/todo-lists",
        response_model=TodoList,
        status_code=status.HTTP_201_CREATED,
        summary="Create to-do list",
    )
    def todo_lists_create(
        payload: TodoListCreateRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        creator: deps.TodoListCreator = Depends(deps.get_todo_list_creator),
    ) -> TodoList:
        return creator(payload.model_dump(), caller.user_id)

    @application.get(
        "/teams/{team_id}/todo-lists",
        response_model=list[TodoList],
        summary="List team to-do lists",
    )
    def todo_lists_list(
        team_id: int,
        provider: deps.TodoListProvider = Depends(deps.get_todo_list_provider),
    ) -> list[TodoList]:
        return provider(team_id)

    @application.post(
        "/tasks",
        response_model=Task,
        status_code=status.HTTP_201_CREATED,
        summary="Create task",
    )
    def tasks_create(
        payload: TaskCreateRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        creator: deps.TaskCreator = Depends(deps.get_task_creator),
    ) -> Task:
        return creator(payload.model_dump(), caller.user_id)

    @application.get(
        "/todo-lists/{todo_list_id}/tasks",
        response_model=list[Task],
        summary="List tasks, newest first",
    )
    def tasks_list(
        todo_list_id: int,
        provider: deps.TaskProvider = Depends(deps.get_task_provider),
    ) -> list[Task]:
        return provider(todo_list_id)

    @application.patch("/tasks/{task_id}", response_model=Task, summary="Update task")
    def tasks_update(
        task_id: int,
        payload: TaskUpdateRequest,
        auth: None = Depends(deps.require_api_token),
        updater: deps.TaskUpdater = Depends(deps.get_task_updater),
    ) -> Task:
        changes = payload.changes()
        logger.debug("Updating task %s with payload=%s", task_id, changes)
        return updater(task_id, changes)

    # Shopping

    @application.post(
        "/shopping-lists",
        response_model=ShoppingList,
        status_code=status.HTTP_201_CREATED,
        summary="Create shopping list",
    )
    def shopping_lists_create(
        payload: ShoppingListCreateRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        creator: deps.ShoppingListCreator = Depends(deps.get_shopping_list_creator),
    ) -> ShoppingList:
        return creator(payload.model_dump(), caller.user_id)

    @application.get(
        "/teams/{team_id}/shopping-lists",
        response_model=list[ShoppingList],
        summary="List team shopping lists",
    )
    def shopping_lists_list(
        team_id: int,
        provider: deps.ShoppingListProvider = Depends(deps.get_shopping_list_provider),
    ) -> list[ShoppingList]:
        return provider(team_id)

    @application.post(
        "/shopping-items",
        response_model=ShoppingItem,
        status_code=status.HTTP_201_CREATED,
        summary="Add item to a shopping list",
    )
    def shopping_items_create(
        payload: ShoppingItemCreateRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        creator: deps.ShoppingItemCreator = Depends(deps.get_shopping_item_creator),
    ) -> ShoppingItem:
        return creator(payload.model_dump(), caller.user_id)

    @application.get(
        "/shopping-lists/{shopping_list_id}/items",
        response_model=list[ShoppingItem],
        summary="List shopping list items",
    )
    def shopping_items_list(
        shopping_list_id: int,
        provider: deps.ShoppingItemProvider = Depends(deps.get_shopping_item_provider),
    ) -> list[ShoppingItem]:
        return provider(shopping_list_id)

    @application.patch(
        "/shopping-items/{item_id}",
        response_model=ShoppingItem,
        summary="Update shopping item",
    )
    def shopping_items_update(
        item_id: int,
        payload: ShoppingItemUpdateRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        updater: deps.ShoppingItemUpdater = Depends(deps.get_shopping_item_updater),
    ) -> ShoppingItem:
        changes = payload.changes()
        logger.debug("Updating shopping item %s with payload=%s", item_id, changes)
        return updater(item_id, changes, caller.user_id)

    # Calendar

    @application.post(
        "/calendar-events",
        response_model=CalendarEvent,
        status_code=status.HTTP_201_CREATED,
        summary="Create calendar event",
    )
    def calendar_events_create(
        payload: CalendarEventCreateRequest,
        auth: None = Depends(deps.require_api_token),
        caller: deps.CallerContext = Depends(deps.get_caller),
        creator: deps.CalendarEventCreator = Depends(deps.get_calendar_event_creator),
    ) -> CalendarEvent:
        return creator(payload.model_dump(), caller.user_id)

    @application.get(
        "/teams/{team_id}/calendar-events",
        response_model=list[CalendarEvent],
        summary="List team calendar events, latest start first",
    )
    def calendar_events_list(
        team_id: int,
        start_date: Optional[datetime] = Query(default=None),
        end_date: Optional[datetime] = Query(default=None),
        provider: deps.CalendarEventProvider = Depends(deps.get_calendar_event_provider),
    ) -> list[CalendarEvent]:
        return provider(team_id, start_date, end_date)

    @application.patch(
        "/calendar-events/{event_id}",
        response_model=CalendarEvent,
        summary="Update calendar event",
    )
    def calendar_events_update(
        event_id: int,
        payload: CalendarEventUpdateRequest,
        auth: None = Depends(deps.require_api_token),
        updater: deps.CalendarEventUpdater = Depends(deps.get_calendar_event_updater),
    ) -> CalendarEvent:
        return updater(event_id, payload.changes())

    # Features

    @application.get("/features", response_model=list[Feature], summary="List feature flags")
    def features_list(
        provider: deps.FeatureProvider = Depends(deps.get_feature_provider),
    ) -> list[Feature]:
        return provider()

    @application.get(
        "/features/enabled",
        response_model=list[str],
        summary="List features enabled for the caller's tier",
    )
    def features_enabled(
        caller: deps.CallerContext = Depends(deps.get_caller),
        provider: deps.EnabledFeaturesProvider = Depends(deps.get_enabled_features_provider),
    ) -> list[str]:
        return provider(caller.user_id)

    @application.patch(
        "/features/{feature_id}",
        response_model=Feature,
        summary="Toggle a feature per tier",
    )
    def features_update(
        feature_id: int,
        payload: FeatureUpdateRequest,
        auth: None = Depends(deps.require_api_token),
        updater: deps.FeatureUpdater = Depends(deps.get_feature_updater),
    ) -> Feature:
        return updater(feature_id, payload.changes())

    return application


app = create_app()

__all__ = ["app", "create_app"]

"""Shared helpers for integration tests."""

from __future__ import annotations

from teamhub.config import get_settings


def auth_headers(user_id: int | None = None) -> dict[str, str]:
    settings = get_settings()
    headers: dict[str, str] = {}
    if settings.api_token:
        headers["Authorization"] = f"Bearer {settings.api_token}"
    if user_id is not None:
        headers[settings.caller_header] = str(user_id)
    return headers

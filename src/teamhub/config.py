"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/teamhub.db"),
        description="SQLite database location.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for mutating endpoints.",
    )
    caller_header: str = Field(
        default="X-User-ID",
        description="Header carrying the authenticated caller's user id.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    server_host: str = Field(default="127.0.0.1", description="Bind address for `teamhub serve`.")
    server_port: int = Field(default=8000, description="Bind port for `teamhub serve`.")
    server_duration: Optional[float] = Field(
        default=None,
        gt=0,
        description="Stop the server after this many seconds (smoke runs).",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (db_path := _env("TEAMHUB_DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (api_token := _env("TEAMHUB_API_TOKEN")):
        payload["api_token"] = api_token
    if (caller_header := _env("TEAMHUB_CALLER_HEADER")):
        payload["caller_header"] = caller_header
    if (log_level := _env("TEAMHUB_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("TEAMHUB_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("TEAMHUB_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    if (server_host := _env("TEAMHUB_SERVER_HOST")):
        payload["server_host"] = server_host
    if (server_port := _env("TEAMHUB_SERVER_PORT")):
        try:
            payload["server_port"] = int(server_port)
        except ValueError:
            pass
    if (server_duration := _env("TEAMHUB_SERVER_DURATION")):
        try:
            parsed_duration = float(server_duration)
        except ValueError:
            parsed_duration = 0.0
        if parsed_duration > 0:
            payload["server_duration"] = parsed_duration
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())

"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from teamhub.config import get_settings


def test_defaults(monkeypatch):
    for key in (
        "TEAMHUB_CALLER_HEADER",
        "TEAMHUB_LOG_LEVEL",
        "TEAMHUB_LOG_FORMAT",
        "TEAMHUB_LOG_REQUESTS",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.api_token is None
    assert settings.caller_header == "X-User-ID"
    assert settings.log_format == "plain"
    assert settings.log_requests is True


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TEAMHUB_DATABASE_PATH", str(tmp_path / "custom.db"))
    monkeypatch.setenv("TEAMHUB_API_TOKEN", "abc")
    monkeypatch.setenv("TEAMHUB_CALLER_HEADER", "X-Caller")
    monkeypatch.setenv("TEAMHUB_LOG_REQUESTS", "false")
    monkeypatch.setenv("TEAMHUB_SERVER_PORT", "9001")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.database_path == Path(tmp_path / "custom.db")
    assert settings.api_token == "abc"
    assert settings.caller_header == "X-Caller"
    assert settings.log_requests is False
    assert settings.server_port == 9001


def test_env_file_values_are_used(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TEAMHUB_LOG_LEVEL", raising=False)
    (tmp_path / ".env").write_text("# local overrides\nTEAMHUB_LOG_LEVEL=DEBUG\n")
    get_settings.cache_clear()

    assert get_settings().log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["0", "-3", "abc"])
def test_invalid_server_duration_keeps_default(monkeypatch, raw):
    monkeypatch.setenv("TEAMHUB_SERVER_DURATION", raw)
    get_settings.cache_clear()

    assert get_settings().server_duration is None


def test_server_duration_override(monkeypatch):
    monkeypatch.setenv("TEAMHUB_SERVER_DURATION", "2.5")
    get_settings.cache_clear()

    assert get_settings().server_duration == 2.5

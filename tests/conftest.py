"""Shared pytest fixtures for the TeamHub test suite."""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from teamhub.config import get_settings
from teamhub.db.repository import reset_repository_state
from teamhub.db.users import create_user
from teamhub.models import User
from teamhub.server.app import create_app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database location."""

    db_path = tmp_path / "test_teamhub.db"
    monkeypatch.setenv("TEAMHUB_DATABASE_PATH", str(db_path))
    monkeypatch.delenv("TEAMHUB_API_TOKEN", raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("TEAMHUB_DATABASE_PATH", raising=False)
    get_settings.cache_clear()


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def owner() -> User:
    return create_user(email="owner@example.com", name="Team Owner")


@pytest.fixture()
def member() -> User:
    return create_user(email="member@example.com", name="Second Member")


@pytest.fixture()
def outsider() -> User:
    return create_user(email="outsider@example.com", name="Outsider", tier="paid")

"""ASGI application factory and dependencies for the TeamHub server."""

from teamhub.server.app import app, create_app

__all__ = ["app", "create_app"]

"""Persistence layer: ORM tables, session management, and per-entity repositories."""

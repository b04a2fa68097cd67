"""
TeamHub team-collaboration backend.

The package exposes the HTTP API, persistence layer, and data contracts for teams,
membership approval, shared to-do lists, shopping lists, calendar events, and
tiered feature flags.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"

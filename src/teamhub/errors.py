"""Domain error hierarchy raised by the persistence layer."""

from __future__ import annotations


class TeamHubError(Exception):
    """Base class for errors surfaced to API callers as a failed operation."""

    kind = "error"


class NotFoundError(TeamHubError, ValueError):
    """A referenced entity does not exist."""

    kind = "not_found"

    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StateConflictError(TeamHubError):
    """The entity is not in a state that allows the requested transition."""

    kind = "state_conflict"


class AuthorizationError(TeamHubError):
    """The caller lacks the membership required for the operation."""

    kind = "authorization"


class DuplicateError(TeamHubError):
    """A uniqueness rule would be violated."""

    kind = "duplicate"


class ReferentialIntegrityError(TeamHubError):
    """The store rejected a write referencing a missing row."""

    kind = "referential_integrity"


__all__ = [
    "TeamHubError",
    "NotFoundError",
    "StateConflictError",
    "AuthorizationError",
    "DuplicateError",
    "ReferentialIntegrityError",
]

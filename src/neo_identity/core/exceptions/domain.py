"""Domain exceptions for neo-identity.

These signal programmer errors in the calling code: acting on an entity that
does not exist, or on a disposed service.
"""

from typing import Any

from .base import NeoIdentityError


class ConfigurationError(NeoIdentityError):
    """Raised when identity services are wired with invalid configuration."""
    pass


class EntityNotFoundError(NeoIdentityError):
    """Raised when an entity cannot be found by its key."""

    def __init__(self, entity_type: str, identifier: Any):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(
            f"{entity_type} '{identifier}' not found",
            details={"entity_type": entity_type, "identifier": str(identifier)},
        )


class UserNotFoundError(EntityNotFoundError):
    """Raised when a user does not exist in the user store."""

    def __init__(self, identifier: Any):
        super().__init__("User", identifier)


class RoleNotFoundError(EntityNotFoundError):
    """Raised when a role does not exist in the role store."""

    def __init__(self, identifier: Any):
        super().__init__("Role", identifier)


class ObjectDisposedError(NeoIdentityError):
    """Raised when a disposed manager or repository is used."""

    def __init__(self, object_name: str):
        self.object_name = object_name
        super().__init__(f"Cannot access a disposed {object_name}")

"""Storage-related exceptions for neo-identity."""

from typing import Any

from .base import NeoIdentityError


class DatabaseError(NeoIdentityError):
    """Base class for storage errors."""
    pass


class RepositoryError(DatabaseError):
    """Raised when a repository operation cannot be completed."""
    pass


class ConcurrencyError(RepositoryError):
    """Raised when an update or delete hits a stale concurrency stamp.

    Repositories convert this into a failed IdentityResult before it reaches
    the managers.
    """

    def __init__(self, entity_type: str, identifier: Any):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(
            f"{entity_type} '{identifier}' was modified or deleted by another operation",
            details={"entity_type": entity_type, "identifier": str(identifier)},
        )


class DuplicateEntityError(RepositoryError):
    """Raised when storage rejects an insert on a unique constraint."""

    def __init__(self, entity_type: str, field_name: str, value: Any):
        self.entity_type = entity_type
        self.field_name = field_name
        self.value = value
        super().__init__(
            f"{entity_type} with {field_name} '{value}' already exists",
            details={"entity_type": entity_type, "field": field_name, "value": str(value)},
        )

"""Exceptions module for neo-identity."""

from .base import NeoIdentityError, create_error_response
from .database import (
    ConcurrencyError,
    DatabaseError,
    DuplicateEntityError,
    RepositoryError,
)
from .domain import (
    ConfigurationError,
    EntityNotFoundError,
    ObjectDisposedError,
    RoleNotFoundError,
    UserNotFoundError,
)

__all__ = [
    "NeoIdentityError",
    "create_error_response",
    "ConcurrencyError",
    "DatabaseError",
    "DuplicateEntityError",
    "RepositoryError",
    "ConfigurationError",
    "EntityNotFoundError",
    "ObjectDisposedError",
    "RoleNotFoundError",
    "UserNotFoundError",
]

"""Persistence plumbing shared by the identity repositories."""

from .repositories.base import (
    AsyncPGRepositoryBase,
    InMemoryRepositoryBase,
    PendingCommand,
    RepositoryBase,
    affected_rows,
)
from .utils.schema import build_schema_statements, create_identity_schema

__all__ = [
    "AsyncPGRepositoryBase",
    "InMemoryRepositoryBase",
    "PendingCommand",
    "RepositoryBase",
    "affected_rows",
    "build_schema_statements",
    "create_identity_schema",
]

"""Roles feature: role entities, repositories, validation and management."""

from .entities import IdentityRole, IdentityRoleClaim, RoleClaimRepository, RoleRepository
from .repositories import (
    AsyncPGRoleClaimRepository,
    AsyncPGRoleRepository,
    InMemoryRoleClaimRepository,
    InMemoryRoleRepository,
)
from .services import RoleManager, RoleValidator

__all__ = [
    "IdentityRole",
    "IdentityRoleClaim",
    "RoleRepository",
    "RoleClaimRepository",
    "AsyncPGRoleRepository",
    "AsyncPGRoleClaimRepository",
    "InMemoryRoleRepository",
    "InMemoryRoleClaimRepository",
    "RoleManager",
    "RoleValidator",
]

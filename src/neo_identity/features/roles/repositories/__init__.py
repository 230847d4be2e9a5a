"""Role repositories: relational (asyncpg) and in-memory."""

from .base import RoleRepositoryBase
from .in_memory import InMemoryRoleClaimRepository, InMemoryRoleRepository
from .role_claim_repository import AsyncPGRoleClaimRepository
from .role_repository import AsyncPGRoleRepository

__all__ = [
    "RoleRepositoryBase",
    "InMemoryRoleRepository",
    "InMemoryRoleClaimRepository",
    "AsyncPGRoleRepository",
    "AsyncPGRoleClaimRepository",
]

"""User repositories: relational (asyncpg) and in-memory."""

from .base import UserRepositoryBase
from .in_memory import (
    InMemoryUserClaimRepository,
    InMemoryUserRepository,
    InMemoryUserRoleRepository,
)
from .user_claim_repository import AsyncPGUserClaimRepository
from .user_repository import AsyncPGUserRepository
from .user_role_repository import AsyncPGUserRoleRepository

__all__ = [
    "UserRepositoryBase",
    "InMemoryUserRepository",
    "InMemoryUserClaimRepository",
    "InMemoryUserRoleRepository",
    "AsyncPGUserRepository",
    "AsyncPGUserClaimRepository",
    "AsyncPGUserRoleRepository",
]

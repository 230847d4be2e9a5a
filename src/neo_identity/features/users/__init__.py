"""Users feature: user entities, repositories, validation and management."""

from .entities import (
    IdentityUser,
    IdentityUserClaim,
    IdentityUserRole,
    UserClaimRepository,
    UserRepository,
    UserRoleRepository,
)
from .repositories import (
    AsyncPGUserClaimRepository,
    AsyncPGUserRepository,
    AsyncPGUserRoleRepository,
    InMemoryUserClaimRepository,
    InMemoryUserRepository,
    InMemoryUserRoleRepository,
)
from .services import UserManager, UserValidator

__all__ = [
    "IdentityUser",
    "IdentityUserClaim",
    "IdentityUserRole",
    "UserRepository",
    "UserClaimRepository",
    "UserRoleRepository",
    "AsyncPGUserRepository",
    "AsyncPGUserClaimRepository",
    "AsyncPGUserRoleRepository",
    "InMemoryUserRepository",
    "InMemoryUserClaimRepository",
    "InMemoryUserRoleRepository",
    "UserManager",
    "UserValidator",
]

"""User feature entities and protocols."""

from .protocols import UserClaimRepository, UserRepository, UserRoleRepository
from .user import IdentityUser
from .user_claim import IdentityUserClaim
from .user_role import IdentityUserRole

__all__ = [
    "IdentityUser",
    "IdentityUserClaim",
    "IdentityUserRole",
    "UserRepository",
    "UserClaimRepository",
    "UserRoleRepository",
]

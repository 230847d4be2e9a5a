"""Role feature entities and protocols."""

from .protocols import RoleClaimRepository, RoleRepository
from .role import IdentityRole
from .role_claim import IdentityRoleClaim

__all__ = [
    "IdentityRole",
    "IdentityRoleClaim",
    "RoleRepository",
    "RoleClaimRepository",
]

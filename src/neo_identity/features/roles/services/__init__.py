"""Role services."""

from .role_manager import RoleManager
from .role_validator import RoleValidator

__all__ = ["RoleManager", "RoleValidator"]

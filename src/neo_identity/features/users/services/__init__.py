"""User services."""

from .user_manager import UserManager
from .user_validator import UserValidator, is_valid_email

__all__ = ["UserManager", "UserValidator", "is_valid_email"]

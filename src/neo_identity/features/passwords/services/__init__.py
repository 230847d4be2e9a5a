"""Password services."""

from .password_hasher import BcryptPasswordHasher
from .password_validator import PasswordValidator

__all__ = ["BcryptPasswordHasher", "PasswordValidator"]

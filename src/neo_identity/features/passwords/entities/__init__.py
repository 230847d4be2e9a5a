"""Password protocols."""

from .protocols import PasswordHasher, PasswordValidator

__all__ = ["PasswordHasher", "PasswordValidator"]

"""Password hashing and password policy validation."""

from .entities.protocols import PasswordHasher, PasswordValidator as PasswordValidatorProtocol
from .services.password_hasher import BcryptPasswordHasher
from .services.password_validator import PasswordValidator

__all__ = [
    "PasswordHasher",
    "PasswordValidatorProtocol",
    "BcryptPasswordHasher",
    "PasswordValidator",
]

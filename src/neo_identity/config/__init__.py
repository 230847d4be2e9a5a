"""Configuration for neo-identity: constants, option groups, settings and logging."""

from .constants import (
    AuthenticationTypes,
    CharacterSets,
    ClaimTypes,
    DatabaseSchemas,
    IdentityErrorCode,
    PasswordVerificationResult,
    PolicyDefaults,
    SignInResult,
)
from .logging_config import LoggingConfig, get_logger, setup_logging
from .options import (
    ApplicationIdentityOptions,
    IdentityOptions,
    LockoutOptions,
    PasswordOptions,
    RepositoryOptions,
    RoleOptions,
    UserOptions,
)
from .settings import IdentitySettings, get_identity_settings

__all__ = [
    "AuthenticationTypes",
    "CharacterSets",
    "ClaimTypes",
    "DatabaseSchemas",
    "IdentityErrorCode",
    "PasswordVerificationResult",
    "PolicyDefaults",
    "SignInResult",
    "LoggingConfig",
    "get_logger",
    "setup_logging",
    "ApplicationIdentityOptions",
    "IdentityOptions",
    "LockoutOptions",
    "PasswordOptions",
    "RepositoryOptions",
    "RoleOptions",
    "UserOptions",
    "IdentitySettings",
    "get_identity_settings",
]

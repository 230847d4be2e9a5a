"""Neo-Identity - identity and membership library.

Users and roles with pluggable persistence (asyncpg or in-memory), password
hashing and policy validation, claims, lockout and password sign-in.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    AuthenticationTypes,
    ClaimTypes,
    DatabaseSchemas,
    IdentityErrorCode,
    PasswordVerificationResult,
    SignInResult,
    # Options
    ApplicationIdentityOptions,
    IdentityOptions,
    LockoutOptions,
    PasswordOptions,
    RepositoryOptions,
    RoleOptions,
    UserOptions,
    IdentitySettings,
    get_identity_settings,
)

from .core.exceptions import (
    NeoIdentityError,
    ConfigurationError,
    DatabaseError,
    RepositoryError,
    ConcurrencyError,
    DuplicateEntityError,
    EntityNotFoundError,
    UserNotFoundError,
    RoleNotFoundError,
    ObjectDisposedError,
)

from .core.shared import (
    IdentityError,
    IdentityResult,
    IdentityErrorDescriber,
    LookupNormalizer,
    UpperInvariantLookupNormalizer,
)

from .core.value_objects import Claim

from .features.users import (
    IdentityUser,
    IdentityUserClaim,
    IdentityUserRole,
    UserManager,
    UserValidator,
    AsyncPGUserRepository,
    AsyncPGUserClaimRepository,
    AsyncPGUserRoleRepository,
    InMemoryUserRepository,
    InMemoryUserClaimRepository,
    InMemoryUserRoleRepository,
)

from .features.roles import (
    IdentityRole,
    IdentityRoleClaim,
    RoleManager,
    RoleValidator,
    AsyncPGRoleRepository,
    AsyncPGRoleClaimRepository,
    InMemoryRoleRepository,
    InMemoryRoleClaimRepository,
)

from .features.passwords import BcryptPasswordHasher, PasswordHasher, PasswordValidator

from .features.auth import (
    ApplicationIdentity,
    ApplicationPrincipal,
    ApplicationPrincipalFactory,
    IdentityContext,
    SignInManager,
)

from .features.database import build_schema_statements, create_identity_schema

from .infrastructure import IdentityServiceFactory, IdentityServices

__all__ = [
    "__version__",
    # Config
    "AuthenticationTypes",
    "ClaimTypes",
    "DatabaseSchemas",
    "IdentityErrorCode",
    "PasswordVerificationResult",
    "SignInResult",
    "ApplicationIdentityOptions",
    "IdentityOptions",
    "LockoutOptions",
    "PasswordOptions",
    "RepositoryOptions",
    "RoleOptions",
    "UserOptions",
    "IdentitySettings",
    "get_identity_settings",
    "setup_logging",
    # Exceptions
    "NeoIdentityError",
    "ConfigurationError",
    "DatabaseError",
    "RepositoryError",
    "ConcurrencyError",
    "DuplicateEntityError",
    "EntityNotFoundError",
    "UserNotFoundError",
    "RoleNotFoundError",
    "ObjectDisposedError",
    # Results
    "IdentityError",
    "IdentityResult",
    "IdentityErrorDescriber",
    "LookupNormalizer",
    "UpperInvariantLookupNormalizer",
    "Claim",
    # Users
    "IdentityUser",
    "IdentityUserClaim",
    "IdentityUserRole",
    "UserManager",
    "UserValidator",
    "AsyncPGUserRepository",
    "AsyncPGUserClaimRepository",
    "AsyncPGUserRoleRepository",
    "InMemoryUserRepository",
    "InMemoryUserClaimRepository",
    "InMemoryUserRoleRepository",
    # Roles
    "IdentityRole",
    "IdentityRoleClaim",
    "RoleManager",
    "RoleValidator",
    "AsyncPGRoleRepository",
    "AsyncPGRoleClaimRepository",
    "InMemoryRoleRepository",
    "InMemoryRoleClaimRepository",
    # Passwords
    "BcryptPasswordHasher",
    "PasswordHasher",
    "PasswordValidator",
    # Auth
    "ApplicationIdentity",
    "ApplicationPrincipal",
    "ApplicationPrincipalFactory",
    "IdentityContext",
    "SignInManager",
    # Database
    "build_schema_statements",
    "create_identity_schema",
    # Wiring
    "IdentityServiceFactory",
    "IdentityServices",
]

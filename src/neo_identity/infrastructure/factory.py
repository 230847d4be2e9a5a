"""Identity service factory.

Wires repositories, validators, the password hasher and the managers into
one bundle, for either the relational (asyncpg) or the in-memory backend.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..config.options import IdentityOptions
from ..config.settings import IdentitySettings, get_identity_settings
from ..core.exceptions import ConfigurationError
from ..core.shared import (
    IdentityErrorDescriber,
    LookupNormalizer,
    UpperInvariantLookupNormalizer,
)
from ..utils.datetime import Clock, utc_now
from ..features.auth.services import ApplicationPrincipalFactory, SignInManager
from ..features.passwords.entities import PasswordHasher
from ..features.passwords.services import BcryptPasswordHasher, PasswordValidator
from ..features.roles.entities import RoleClaimRepository, RoleRepository
from ..features.roles.repositories import (
    AsyncPGRoleClaimRepository,
    AsyncPGRoleRepository,
    InMemoryRoleClaimRepository,
    InMemoryRoleRepository,
)
from ..features.roles.services import RoleManager, RoleValidator
from ..features.users.entities import UserClaimRepository, UserRepository, UserRoleRepository
from ..features.users.repositories import (
    AsyncPGUserClaimRepository,
    AsyncPGUserRepository,
    AsyncPGUserRoleRepository,
    InMemoryUserClaimRepository,
    InMemoryUserRepository,
    InMemoryUserRoleRepository,
)
from ..features.users.services import UserManager, UserValidator


logger = logging.getLogger(__name__)


@dataclass
class IdentityServices:
    """The wired identity services."""

    user_manager: UserManager
    role_manager: RoleManager
    principal_factory: ApplicationPrincipalFactory
    sign_in_manager: SignInManager

    def dispose(self) -> None:
        self.user_manager.dispose()
        self.role_manager.dispose()

    async def __aenter__(self) -> "IdentityServices":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.dispose()


class IdentityServiceFactory:
    """Builds IdentityServices from options."""

    def __init__(
        self,
        options: Optional[IdentityOptions] = None,
        password_hasher: Optional[PasswordHasher] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        normalizer: Optional[LookupNormalizer] = None,
        clock: Clock = utc_now,
        auto_save_changes: bool = True,
    ):
        if not callable(clock):
            raise ConfigurationError("clock must be a callable returning the current UTC time")
        self.options = options or IdentityOptions()
        self.password_hasher = password_hasher or BcryptPasswordHasher()
        self.error_describer = error_describer or IdentityErrorDescriber()
        self.normalizer = normalizer or UpperInvariantLookupNormalizer()
        self.clock = clock
        self.auto_save_changes = auto_save_changes

    @classmethod
    def from_settings(cls, settings: Optional[IdentitySettings] = None, **kwargs) -> "IdentityServiceFactory":
        """Create a factory from environment-driven settings."""
        settings = settings or get_identity_settings()
        kwargs.setdefault("password_hasher", BcryptPasswordHasher(settings.bcrypt_rounds))
        return cls(options=settings.to_options(), **kwargs)

    def create_in_memory(self) -> IdentityServices:
        """Build services over fresh in-memory repositories."""
        describer = self.error_describer
        auto_save = self.auto_save_changes
        logger.info("Creating identity services with in-memory repositories")
        return self.create(
            InMemoryUserRepository(error_describer=describer, auto_save_changes=auto_save),
            InMemoryUserClaimRepository(error_describer=describer, auto_save_changes=auto_save),
            InMemoryUserRoleRepository(error_describer=describer, auto_save_changes=auto_save),
            InMemoryRoleRepository(error_describer=describer, auto_save_changes=auto_save),
            InMemoryRoleClaimRepository(error_describer=describer, auto_save_changes=auto_save),
        )

    def create_asyncpg(self, pool) -> IdentityServices:
        """Build services over an asyncpg pool.

        Args:
            pool: asyncpg Pool; the identity schema must already exist
                (see ``create_identity_schema``)
        """
        if pool is None:
            raise ValueError("pool cannot be None")

        schema = self.options.repository.schema_name
        describer = self.error_describer
        auto_save = self.auto_save_changes
        logger.info(f"Creating identity services on schema {schema}")
        return self.create(
            AsyncPGUserRepository(pool, schema, error_describer=describer, auto_save_changes=auto_save),
            AsyncPGUserClaimRepository(pool, schema, error_describer=describer, auto_save_changes=auto_save),
            AsyncPGUserRoleRepository(pool, schema, error_describer=describer, auto_save_changes=auto_save),
            AsyncPGRoleRepository(pool, schema, error_describer=describer, auto_save_changes=auto_save),
            AsyncPGRoleClaimRepository(pool, schema, error_describer=describer, auto_save_changes=auto_save),
        )

    def create(
        self,
        user_repository: UserRepository,
        user_claim_repository: UserClaimRepository,
        user_role_repository: UserRoleRepository,
        role_repository: RoleRepository,
        role_claim_repository: RoleClaimRepository,
    ) -> IdentityServices:
        """Build services over caller-supplied repositories.

        Raises:
            ConfigurationError: If any repository is missing
        """
        repositories = {
            "user_repository": user_repository,
            "user_claim_repository": user_claim_repository,
            "user_role_repository": user_role_repository,
            "role_repository": role_repository,
            "role_claim_repository": role_claim_repository,
        }
        missing = [name for name, repository in repositories.items() if repository is None]
        if missing:
            raise ConfigurationError(f"Identity services wiring failed, missing: {', '.join(missing)}")

        options = self.options
        describer = self.error_describer

        role_manager = RoleManager(
            role_repository,
            role_claim_repository,
            role_validator=RoleValidator(options.role, describer),
            normalizer=self.normalizer,
            error_describer=describer,
        )
        user_manager = UserManager(
            user_repository,
            user_claim_repository,
            user_role_repository,
            role_manager,
            password_hasher=self.password_hasher,
            password_validator=PasswordValidator(options.password, describer),
            user_validator=UserValidator(options.user, describer, self.normalizer, user_repository),
            normalizer=self.normalizer,
            error_describer=describer,
            options=options,
            clock=self.clock,
        )
        principal_factory = ApplicationPrincipalFactory(
            user_manager, role_manager, options.application_identity
        )
        sign_in_manager = SignInManager(user_manager, principal_factory)

        return IdentityServices(
            user_manager=user_manager,
            role_manager=role_manager,
            principal_factory=principal_factory,
            sign_in_manager=sign_in_manager,
        )

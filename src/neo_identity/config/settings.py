"""Environment-driven settings for neo-identity.

Every option group can be supplied through ``IDENTITY_``-prefixed environment
variables (nested groups use ``__``), for example::

    IDENTITY_PASSWORD__REQUIRED_LENGTH=12
    IDENTITY_LOCKOUT__MAX_FAILED_ACCESS_ATTEMPTS=3
    IDENTITY_REPOSITORY__SCHEMA_NAME=auth
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import PolicyDefaults
from .options import (
    ApplicationIdentityOptions,
    IdentityOptions,
    LockoutOptions,
    PasswordOptions,
    RepositoryOptions,
    RoleOptions,
    UserOptions,
)


class IdentitySettings(BaseSettings):
    """Identity settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="IDENTITY_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    password: PasswordOptions = Field(default_factory=PasswordOptions)
    lockout: LockoutOptions = Field(default_factory=LockoutOptions)
    user: UserOptions = Field(default_factory=UserOptions)
    role: RoleOptions = Field(default_factory=RoleOptions)
    application_identity: ApplicationIdentityOptions = Field(default_factory=ApplicationIdentityOptions)
    repository: RepositoryOptions = Field(default_factory=RepositoryOptions)

    # Password hashing cost
    bcrypt_rounds: int = Field(
        default=PolicyDefaults.BCRYPT_WORK_FACTOR,
        ge=PolicyDefaults.BCRYPT_MIN_WORK_FACTOR,
        le=PolicyDefaults.BCRYPT_MAX_WORK_FACTOR,
    )

    def to_options(self) -> IdentityOptions:
        """Build the aggregate options object consumed by the managers."""
        return IdentityOptions(
            password=self.password.model_copy(),
            lockout=self.lockout.model_copy(),
            user=self.user.model_copy(),
            role=self.role.model_copy(),
            application_identity=self.application_identity.model_copy(),
            repository=self.repository.model_copy(),
        )


@lru_cache()
def get_identity_settings() -> IdentitySettings:
    """Get cached identity settings instance."""
    return IdentitySettings()

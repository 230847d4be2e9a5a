"""Identity policy options.

Option groups are pydantic models so that values coming from the environment,
from ``.env`` files or from host code are validated the same way.
"""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from .constants import CharacterSets, ClaimTypes, DatabaseSchemas, PolicyDefaults


class PasswordOptions(BaseModel):
    """Password complexity policy."""

    model_config = ConfigDict(validate_assignment=True)

    require_digit: bool = True
    required_length: int = Field(default=PolicyDefaults.PASSWORD_REQUIRED_LENGTH, ge=0)
    required_unique_chars: int = Field(default=PolicyDefaults.PASSWORD_REQUIRED_UNIQUE_CHARS, ge=0)
    require_lowercase: bool = True
    require_non_alphanumeric: bool = True
    require_uppercase: bool = True


class LockoutOptions(BaseModel):
    """Account lockout policy."""

    model_config = ConfigDict(validate_assignment=True)

    allowed_for_new_users: bool = True
    default_lockout_time_span: timedelta = Field(
        default=timedelta(seconds=PolicyDefaults.LOCKOUT_TIME_SPAN_SECONDS)
    )
    max_failed_access_attempts: int = Field(
        default=PolicyDefaults.LOCKOUT_MAX_FAILED_ACCESS_ATTEMPTS, ge=1
    )


class UserOptions(BaseModel):
    """User name and email policy."""

    model_config = ConfigDict(validate_assignment=True)

    allowed_user_name_characters: str = CharacterSets.USER_NAME
    require_unique_email: bool = False


class RoleOptions(BaseModel):
    """Role name policy."""

    model_config = ConfigDict(validate_assignment=True)

    allowed_role_name_characters: str = CharacterSets.ROLE_NAME
    required_role_name_length: int = Field(default=PolicyDefaults.ROLE_NAME_REQUIRED_LENGTH, ge=0)


class ApplicationIdentityOptions(BaseModel):
    """Claim types used when an identity is generated for a user."""

    model_config = ConfigDict(validate_assignment=True)

    email_claim_type: str = ClaimTypes.EMAIL
    role_claim_type: str = ClaimTypes.ROLE
    user_id_claim_type: str = ClaimTypes.NAME_IDENTIFIER
    user_name_claim_type: str = ClaimTypes.NAME


class RepositoryOptions(BaseModel):
    """Relational storage options."""

    model_config = ConfigDict(validate_assignment=True)

    # 0 keeps key columns unbounded
    max_length_for_keys: int = Field(default=0, ge=0)
    schema_name: str = Field(default=DatabaseSchemas.IDENTITY, pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")


class IdentityOptions(BaseModel):
    """Aggregate of every identity option group."""

    password: PasswordOptions = Field(default_factory=PasswordOptions)
    lockout: LockoutOptions = Field(default_factory=LockoutOptions)
    user: UserOptions = Field(default_factory=UserOptions)
    role: RoleOptions = Field(default_factory=RoleOptions)
    application_identity: ApplicationIdentityOptions = Field(default_factory=ApplicationIdentityOptions)
    repository: RepositoryOptions = Field(default_factory=RepositoryOptions)

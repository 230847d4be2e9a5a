"""Constants and enums for neo-identity.

This module defines the claim type URIs, error codes, character sets and
default policy values used throughout the neo-identity library.
"""

import string
from enum import Enum
from typing import Final


class ClaimTypes:
    """Well-known claim type URIs used when building identities."""

    NAME: Final[str] = "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/name"
    NAME_IDENTIFIER: Final[str] = "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/nameidentifier"
    EMAIL: Final[str] = "http://schemas.xmlsoap.org/ws/2005/05/identity/claims/emailaddress"
    ROLE: Final[str] = "http://schemas.microsoft.com/ws/2008/06/identity/claims/role"


class AuthenticationTypes:
    """Authentication types stamped on generated identities."""

    PASSWORD: Final[str] = "Password"


class CharacterSets:
    """Default allowed characters for user and role names."""

    USER_NAME: Final[str] = string.ascii_letters + string.digits + "-._@+"
    ROLE_NAME: Final[str] = string.ascii_letters + string.digits + "-_ "


class PolicyDefaults:
    """Default policy values."""

    PASSWORD_REQUIRED_LENGTH: Final[int] = 6
    PASSWORD_REQUIRED_UNIQUE_CHARS: Final[int] = 1
    ROLE_NAME_REQUIRED_LENGTH: Final[int] = 6
    LOCKOUT_MAX_FAILED_ACCESS_ATTEMPTS: Final[int] = 5
    LOCKOUT_TIME_SPAN_SECONDS: Final[int] = 30
    BCRYPT_WORK_FACTOR: Final[int] = 11
    BCRYPT_MIN_WORK_FACTOR: Final[int] = 4
    BCRYPT_MAX_WORK_FACTOR: Final[int] = 31


class DatabaseSchemas:
    """Database schema names."""

    IDENTITY: Final[str] = "identity"


class IdentityErrorCode(str, Enum):
    """Machine-readable codes carried by failed identity results."""

    DEFAULT_ERROR = "DefaultError"
    CONCURRENCY_FAILURE = "ConcurrencyFailure"
    PASSWORD_MISMATCH = "PasswordMismatch"
    INVALID_TOKEN = "InvalidToken"
    RECOVERY_CODE_REDEMPTION_FAILED = "RecoveryCodeRedemptionFailed"
    LOGIN_ALREADY_ASSOCIATED = "LoginAlreadyAssociated"
    INVALID_USER_NAME = "InvalidUserName"
    INVALID_EMAIL = "InvalidEmail"
    DUPLICATE_USER_NAME = "DuplicateUserName"
    DUPLICATE_EMAIL = "DuplicateEmail"
    INVALID_ROLE_NAME = "InvalidRoleName"
    DUPLICATE_ROLE_NAME = "DuplicateRoleName"
    USER_ALREADY_HAS_PASSWORD = "UserAlreadyHasPassword"
    USER_LOCKOUT_NOT_ENABLED = "UserLockoutNotEnabled"
    USER_ALREADY_IN_ROLE = "UserAlreadyInRole"
    USER_NOT_IN_ROLE = "UserNotInRole"
    USER_LOCKED_OUT = "UserLockedOut"
    USER_NOT_FOUND = "UserNotFound"
    ROLE_NOT_FOUND = "RoleNotFound"
    CLAIM_ALREADY_ASSOCIATED = "ClaimAlreadyAssociated"
    PASSWORD_TOO_SHORT = "PasswordTooShort"
    PASSWORD_REQUIRES_UNIQUE_CHARS = "PasswordRequiresUniqueChars"
    PASSWORD_REQUIRES_NON_ALPHANUMERIC = "PasswordRequiresNonAlphanumeric"
    PASSWORD_REQUIRES_DIGIT = "PasswordRequiresDigit"
    PASSWORD_REQUIRES_LOWER = "PasswordRequiresLower"
    PASSWORD_REQUIRES_UPPER = "PasswordRequiresUpper"


class SignInResult(str, Enum):
    """Outcome of a sign-in attempt."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    INVALID_CREDENTIAL = "invalid_credential"
    LOCKED_OUT = "locked_out"
    # Reserved; no sign-in path produces it yet.
    NOT_ALLOWED = "not_allowed"

    @property
    def succeeded(self) -> bool:
        return self is SignInResult.SUCCEEDED


class PasswordVerificationResult(str, Enum):
    """Outcome of comparing a provided password with a stored hash."""

    FAILED = "failed"
    SUCCESS = "success"

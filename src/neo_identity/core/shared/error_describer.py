"""Error describer for identity results.

Each method builds the IdentityError for one failure code. Hosts that need
localized messages subclass IdentityErrorDescriber and override the
descriptions they care about; the codes stay fixed.
"""

from ...config.constants import IdentityErrorCode
from .results import IdentityError


class IdentityErrorDescriber:
    """Maps identity error codes to descriptions."""

    def _error(self, code: IdentityErrorCode, description: str) -> IdentityError:
        return IdentityError(code=code.value, description=description)

    def default_error(self) -> IdentityError:
        return self._error(IdentityErrorCode.DEFAULT_ERROR, "An unknown failure has occurred.")

    def concurrency_failure(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.CONCURRENCY_FAILURE,
            "Optimistic concurrency failure, object has been modified.",
        )

    def password_mismatch(self) -> IdentityError:
        return self._error(IdentityErrorCode.PASSWORD_MISMATCH, "Incorrect password.")

    def invalid_token(self) -> IdentityError:
        return self._error(IdentityErrorCode.INVALID_TOKEN, "Invalid token.")

    def recovery_code_redemption_failed(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.RECOVERY_CODE_REDEMPTION_FAILED,
            "Recovery code redemption failed.",
        )

    def login_already_associated(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.LOGIN_ALREADY_ASSOCIATED,
            "A user with this login already exists.",
        )

    def invalid_user_name(self, user_name) -> IdentityError:
        return self._error(
            IdentityErrorCode.INVALID_USER_NAME,
            f"User name '{user_name}' is invalid, can only contain letters or digits.",
        )

    def invalid_email(self, email) -> IdentityError:
        return self._error(IdentityErrorCode.INVALID_EMAIL, f"Email '{email}' is invalid.")

    def duplicate_user_name(self, user_name) -> IdentityError:
        return self._error(
            IdentityErrorCode.DUPLICATE_USER_NAME,
            f"User name '{user_name}' is already taken.",
        )

    def duplicate_email(self, email) -> IdentityError:
        return self._error(IdentityErrorCode.DUPLICATE_EMAIL, f"Email '{email}' is already taken.")

    def invalid_role_name(self, role) -> IdentityError:
        return self._error(IdentityErrorCode.INVALID_ROLE_NAME, f"Role name '{role}' is invalid.")

    def duplicate_role_name(self, role) -> IdentityError:
        return self._error(
            IdentityErrorCode.DUPLICATE_ROLE_NAME,
            f"Role name '{role}' is already taken.",
        )

    def user_already_has_password(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.USER_ALREADY_HAS_PASSWORD,
            "User already has a password set.",
        )

    def user_lockout_not_enabled(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.USER_LOCKOUT_NOT_ENABLED,
            "Lockout is not enabled for this user.",
        )

    def user_already_in_role(self, role) -> IdentityError:
        return self._error(
            IdentityErrorCode.USER_ALREADY_IN_ROLE,
            f"User already in role '{role}'.",
        )

    def user_not_in_role(self, role) -> IdentityError:
        return self._error(IdentityErrorCode.USER_NOT_IN_ROLE, f"User is not in role '{role}'.")

    def user_locked_out(self, max_attempts: int) -> IdentityError:
        return self._error(
            IdentityErrorCode.USER_LOCKED_OUT,
            f"User is locked out after {max_attempts} failed access attempts.",
        )

    def user_not_found(self) -> IdentityError:
        return self._error(IdentityErrorCode.USER_NOT_FOUND, "User not found.")

    def role_not_found(self) -> IdentityError:
        return self._error(IdentityErrorCode.ROLE_NOT_FOUND, "Role not found.")

    def claim_already_associated(self, claim_name) -> IdentityError:
        return self._error(
            IdentityErrorCode.CLAIM_ALREADY_ASSOCIATED,
            f"Claim '{claim_name}' is already associated.",
        )

    def password_too_short(self, length: int) -> IdentityError:
        return self._error(
            IdentityErrorCode.PASSWORD_TOO_SHORT,
            f"Passwords must be at least {length} characters.",
        )

    def password_requires_unique_chars(self, unique_chars: int) -> IdentityError:
        return self._error(
            IdentityErrorCode.PASSWORD_REQUIRES_UNIQUE_CHARS,
            f"Passwords must use at least {unique_chars} different characters.",
        )

    def password_requires_non_alphanumeric(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC,
            "Passwords must have at least one non alphanumeric character.",
        )

    def password_requires_digit(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.PASSWORD_REQUIRES_DIGIT,
            "Passwords must have at least one digit ('0'-'9').",
        )

    def password_requires_lower(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.PASSWORD_REQUIRES_LOWER,
            "Passwords must have at least one lowercase ('a'-'z').",
        )

    def password_requires_upper(self) -> IdentityError:
        return self._error(
            IdentityErrorCode.PASSWORD_REQUIRES_UPPER,
            "Passwords must have at least one uppercase ('A'-'Z').",
        )

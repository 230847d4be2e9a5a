"""Password policy validator."""

from typing import Optional

from ....config.options import PasswordOptions
from ....core.shared import IdentityErrorDescriber, IdentityResult


class PasswordValidator:
    """Checks a password against PasswordOptions.

    Rules run in a fixed order and the first failing rule is returned:
    digit, length, unique characters, lowercase, non-alphanumeric, uppercase.
    """

    def __init__(
        self,
        options: Optional[PasswordOptions] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
    ):
        self.options = options or PasswordOptions()
        self.error_describer = error_describer or IdentityErrorDescriber()

    def validate(self, password: str) -> IdentityResult:
        if password is None:
            raise ValueError("password cannot be None")

        options = self.options
        describer = self.error_describer

        if options.require_digit and not any(c.isnumeric() for c in password):
            return IdentityResult.failed(describer.password_requires_digit())

        if options.required_length > len(password):
            return IdentityResult.failed(describer.password_too_short(options.required_length))

        if options.required_unique_chars > len(set(password)):
            return IdentityResult.failed(
                describer.password_requires_unique_chars(options.required_unique_chars)
            )

        if options.require_lowercase and not any(c.islower() for c in password):
            return IdentityResult.failed(describer.password_requires_lower())

        if options.require_non_alphanumeric and all(c.isalnum() for c in password):
            return IdentityResult.failed(describer.password_requires_non_alphanumeric())

        if options.require_uppercase and not any(c.isupper() for c in password):
            return IdentityResult.failed(describer.password_requires_upper())

        return IdentityResult.success()

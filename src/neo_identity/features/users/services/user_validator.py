"""User validator."""

import logging
from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from ....config.options import UserOptions
from ....core.shared import (
    IdentityErrorDescriber,
    IdentityResult,
    LookupNormalizer,
    UpperInvariantLookupNormalizer,
)
from ..entities import IdentityUser, UserRepository


logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def is_valid_email(email: Optional[str]) -> bool:
    """Check whether an email address is well formed."""
    if not email or email.strip() != email or email.endswith("."):
        return False
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        return False
    return True


class UserValidator:
    """Validates user names and, when required, email uniqueness."""

    def __init__(
        self,
        options: Optional[UserOptions] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        normalizer: Optional[LookupNormalizer] = None,
        user_repository: Optional[UserRepository] = None,
    ):
        self.options = options or UserOptions()
        self.error_describer = error_describer or IdentityErrorDescriber()
        self.normalizer = normalizer or UpperInvariantLookupNormalizer()
        self.user_repository = user_repository

    async def validate(self, user: IdentityUser) -> IdentityResult:
        """Validate a user.

        Args:
            user: User to validate

        Returns:
            Success, or a failed result with the first violated rule
        """
        if user is None:
            raise ValueError("user cannot be None")

        user_name = user.user_name
        allowed = self.options.allowed_user_name_characters
        if not user_name or not user_name.strip() or any(c not in allowed for c in user_name):
            return IdentityResult.failed(self.error_describer.invalid_user_name(user_name))

        if self.options.require_unique_email:
            return await self._validate_email(user)

        return IdentityResult.success()

    async def _validate_email(self, user: IdentityUser) -> IdentityResult:
        email = user.email
        if not is_valid_email(email):
            return IdentityResult.failed(self.error_describer.invalid_email(email))

        if self.user_repository is None:
            return IdentityResult.success()

        owners = await self.user_repository.find_by_email(self.normalizer.normalize_email(email))
        if any(owner.id != user.id for owner in owners):
            logger.debug(f"Email {email} already belongs to another user")
            return IdentityResult.failed(self.error_describer.duplicate_email(email))

        return IdentityResult.success()

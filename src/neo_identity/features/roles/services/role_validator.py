"""Role validator."""

from typing import Optional

from ....config.options import RoleOptions
from ....core.shared import IdentityErrorDescriber, IdentityResult
from ..entities import IdentityRole


class RoleValidator:
    """Checks role names for length and allowed characters."""

    def __init__(
        self,
        options: Optional[RoleOptions] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
    ):
        self.options = options or RoleOptions()
        self.error_describer = error_describer or IdentityErrorDescriber()

    async def validate(self, role: IdentityRole) -> IdentityResult:
        if role is None:
            raise ValueError("role cannot be None")

        name = role.name or ""
        allowed = self.options.allowed_role_name_characters
        if len(name) < self.options.required_role_name_length or any(c not in allowed for c in name):
            return IdentityResult.failed(self.error_describer.invalid_role_name(role.name))

        return IdentityResult.success()

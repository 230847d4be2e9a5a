"""Entity accessors shared by every role repository."""

from typing import Any, Optional

from ....core.exceptions import DuplicateEntityError
from ....core.shared import IdentityResult
from ..entities import IdentityRole


class RoleRepositoryBase:
    """Accessor half of the RoleRepository protocol."""

    entity_name = "Role"

    def _check(self, role: IdentityRole) -> None:
        self.throw_if_disposed()
        self._require(role, "role")

    def _duplicate_failure(self, entity: Any, error: DuplicateEntityError) -> IdentityResult:
        if "normalized_name" in error.field_name and entity is not None:
            return IdentityResult.failed(self.error_describer.duplicate_role_name(entity.name))
        return IdentityResult.failed(self.error_describer.default_error())

    async def get_role_id(self, role: IdentityRole) -> Any:
        self._check(role)
        return role.id

    async def get_role_name(self, role: IdentityRole) -> Optional[str]:
        self._check(role)
        return role.name

    async def set_role_name(self, role: IdentityRole, name: Optional[str]) -> None:
        self._check(role)
        role.name = name

    async def get_normalized_role_name(self, role: IdentityRole) -> Optional[str]:
        self._check(role)
        return role.normalized_name

    async def set_normalized_role_name(self, role: IdentityRole, normalized_name: Optional[str]) -> None:
        self._check(role)
        role.normalized_name = normalized_name

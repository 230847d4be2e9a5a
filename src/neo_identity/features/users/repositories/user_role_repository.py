"""AsyncPG-based user role repository implementation."""

from typing import Any, List, Optional

from ....core.exceptions import DuplicateEntityError
from ....core.shared import IdentityResult
from ...database.repositories.base import AsyncPGRepositoryBase, PendingCommand
from ...database.utils.queries import (
    USER_ROLE_COLUMNS,
    USER_ROLE_DELETE,
    USER_ROLE_GET_BY_ID,
    USER_ROLE_GET_BY_ROLE_ID,
    USER_ROLE_GET_BY_USER_AND_ROLE,
    USER_ROLE_GET_BY_USER_ID,
    USER_ROLE_INSERT,
    USER_ROLE_UPDATE,
)
from ..entities import IdentityUserRole


class AsyncPGUserRoleRepository(AsyncPGRepositoryBase[IdentityUserRole]):
    """AsyncPG implementation of UserRoleRepository protocol.

    The (user_id, role_id) pair is unique in the relational schema, so a
    membership created twice by racing requests fails with UserAlreadyInRole.
    """

    entity_name = "UserRole"
    entity_type = IdentityUserRole
    columns = USER_ROLE_COLUMNS

    def _duplicate_failure(self, entity: Any, error: DuplicateEntityError) -> IdentityResult:
        if "role_id" in error.field_name and entity is not None:
            return IdentityResult.failed(self.error_describer.user_already_in_role(entity.role_id))
        return super()._duplicate_failure(entity, error)

    async def create(self, user_role: IdentityUserRole) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user_role, "user_role")
        return await self._write(PendingCommand(
            query=USER_ROLE_INSERT,
            args=tuple(self._entity_values(user_role)),
            identifier=user_role.id,
            entity=user_role,
        ))

    async def update(self, user_role: IdentityUserRole) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user_role, "user_role")
        return await self._write(PendingCommand(
            query=USER_ROLE_UPDATE,
            args=tuple(self._entity_values(user_role)),
            identifier=user_role.id,
            entity=user_role,
            check_rows=True,
        ))

    async def delete(self, user_role: IdentityUserRole) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user_role, "user_role")
        return await self._write(PendingCommand(
            query=USER_ROLE_DELETE,
            args=(user_role.id,),
            identifier=user_role.id,
            entity=user_role,
            check_rows=True,
        ))

    async def find_by_id(self, user_role_id: Any) -> Optional[IdentityUserRole]:
        self.throw_if_disposed()
        return await self._fetchrow(USER_ROLE_GET_BY_ID, user_role_id)

    async def find(self, user_id: Any, role_id: Any) -> Optional[IdentityUserRole]:
        self.throw_if_disposed()
        return await self._fetchrow(USER_ROLE_GET_BY_USER_AND_ROLE, user_id, role_id)

    async def find_by_user_id(self, user_id: Any) -> List[IdentityUserRole]:
        self.throw_if_disposed()
        return await self._fetch(USER_ROLE_GET_BY_USER_ID, user_id)

    async def find_by_role_id(self, role_id: Any) -> List[IdentityUserRole]:
        self.throw_if_disposed()
        return await self._fetch(USER_ROLE_GET_BY_ROLE_ID, role_id)

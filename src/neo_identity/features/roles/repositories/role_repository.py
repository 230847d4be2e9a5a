"""AsyncPG-based role repository implementation.

Concrete implementation of RoleRepository protocol using AsyncPG with a
configurable schema.
"""

import logging
from typing import Any, List, Optional

from ....core.shared import IdentityResult
from ....utils.uuid import generate_stamp
from ...database.repositories.base import AsyncPGRepositoryBase, PendingCommand
from ...database.utils.queries import (
    ROLE_COLUMNS,
    ROLE_DELETE,
    ROLE_GET_BY_ID,
    ROLE_GET_BY_NORMALIZED_NAME,
    ROLE_INSERT,
    ROLE_LIST,
    ROLE_UPDATE,
)
from ..entities import IdentityRole
from .base import RoleRepositoryBase


logger = logging.getLogger(__name__)


class AsyncPGRoleRepository(RoleRepositoryBase, AsyncPGRepositoryBase[IdentityRole]):
    """AsyncPG implementation of RoleRepository protocol."""

    entity_type = IdentityRole
    columns = ROLE_COLUMNS

    async def create(self, role: IdentityRole) -> IdentityResult:
        self._check(role)
        result = await self._write(PendingCommand(
            query=ROLE_INSERT,
            args=tuple(self._entity_values(role)),
            identifier=role.id,
            entity=role,
        ))
        if result.succeeded:
            logger.info(f"Stored role {role.id} in {self.schema}")
        return result

    async def update(self, role: IdentityRole) -> IdentityResult:
        self._check(role)
        new_stamp = generate_stamp()
        result = await self._write(PendingCommand(
            query=ROLE_UPDATE,
            args=(role.id, role.concurrency_stamp, role.name, role.normalized_name, new_stamp),
            identifier=role.id,
            entity=role,
            check_rows=True,
        ))
        if result.succeeded:
            role.concurrency_stamp = new_stamp
        return result

    async def delete(self, role: IdentityRole) -> IdentityResult:
        self._check(role)
        return await self._write(PendingCommand(
            query=ROLE_DELETE,
            args=(role.id, role.concurrency_stamp),
            identifier=role.id,
            entity=role,
            check_rows=True,
        ))

    async def find_by_id(self, role_id: Any) -> Optional[IdentityRole]:
        self.throw_if_disposed()
        self._require(role_id, "role_id")
        return await self._fetchrow(ROLE_GET_BY_ID, role_id)

    async def find_by_name(self, normalized_name: str) -> Optional[IdentityRole]:
        self.throw_if_disposed()
        self._require(normalized_name, "normalized_name")
        return await self._fetchrow(ROLE_GET_BY_NORMALIZED_NAME, normalized_name)

    async def list_roles(self) -> List[IdentityRole]:
        self.throw_if_disposed()
        return await self._fetch(ROLE_LIST)

"""AsyncPG-based role claim repository implementation."""

from typing import Any, List, Optional

from ....core.shared import IdentityResult
from ...database.repositories.base import AsyncPGRepositoryBase, PendingCommand
from ...database.utils.queries import (
    ROLE_CLAIM_COLUMNS,
    ROLE_CLAIM_DELETE,
    ROLE_CLAIM_GET_BY_ID,
    ROLE_CLAIM_GET_BY_ROLE_ID,
    ROLE_CLAIM_INSERT,
    ROLE_CLAIM_UPDATE,
)
from ..entities import IdentityRoleClaim


class AsyncPGRoleClaimRepository(AsyncPGRepositoryBase[IdentityRoleClaim]):
    """AsyncPG implementation of RoleClaimRepository protocol."""

    entity_name = "RoleClaim"
    entity_type = IdentityRoleClaim
    columns = ROLE_CLAIM_COLUMNS

    async def create(self, role_claim: IdentityRoleClaim) -> IdentityResult:
        self.throw_if_disposed()
        self._require(role_claim, "role_claim")
        return await self._write(PendingCommand(
            query=ROLE_CLAIM_INSERT,
            args=tuple(self._entity_values(role_claim)),
            identifier=role_claim.id,
            entity=role_claim,
        ))

    async def update(self, role_claim: IdentityRoleClaim) -> IdentityResult:
        self.throw_if_disposed()
        self._require(role_claim, "role_claim")
        return await self._write(PendingCommand(
            query=ROLE_CLAIM_UPDATE,
            args=tuple(self._entity_values(role_claim)),
            identifier=role_claim.id,
            entity=role_claim,
            check_rows=True,
        ))

    async def delete(self, role_claim: IdentityRoleClaim) -> IdentityResult:
        self.throw_if_disposed()
        self._require(role_claim, "role_claim")
        return await self._write(PendingCommand(
            query=ROLE_CLAIM_DELETE,
            args=(role_claim.id,),
            identifier=role_claim.id,
            entity=role_claim,
            check_rows=True,
        ))

    async def find_by_id(self, claim_id: Any) -> Optional[IdentityRoleClaim]:
        self.throw_if_disposed()
        return await self._fetchrow(ROLE_CLAIM_GET_BY_ID, claim_id)

    async def find_by_role_id(self, role_id: Any) -> List[IdentityRoleClaim]:
        self.throw_if_disposed()
        return await self._fetch(ROLE_CLAIM_GET_BY_ROLE_ID, role_id)

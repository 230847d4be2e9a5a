"""AsyncPG-based user claim repository implementation."""

from typing import Any, List, Optional

from ....core.shared import IdentityResult
from ...database.repositories.base import AsyncPGRepositoryBase, PendingCommand
from ...database.utils.queries import (
    USER_CLAIM_COLUMNS,
    USER_CLAIM_DELETE,
    USER_CLAIM_GET_BY_CLAIM,
    USER_CLAIM_GET_BY_ID,
    USER_CLAIM_GET_BY_USER_ID,
    USER_CLAIM_INSERT,
    USER_CLAIM_UPDATE,
)
from ..entities import IdentityUserClaim


class AsyncPGUserClaimRepository(AsyncPGRepositoryBase[IdentityUserClaim]):
    """AsyncPG implementation of UserClaimRepository protocol."""

    entity_name = "UserClaim"
    entity_type = IdentityUserClaim
    columns = USER_CLAIM_COLUMNS

    async def create(self, user_claim: IdentityUserClaim) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user_claim, "user_claim")
        return await self._write(PendingCommand(
            query=USER_CLAIM_INSERT,
            args=tuple(self._entity_values(user_claim)),
            identifier=user_claim.id,
            entity=user_claim,
        ))

    async def update(self, user_claim: IdentityUserClaim) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user_claim, "user_claim")
        return await self._write(PendingCommand(
            query=USER_CLAIM_UPDATE,
            args=tuple(self._entity_values(user_claim)),
            identifier=user_claim.id,
            entity=user_claim,
            check_rows=True,
        ))

    async def delete(self, user_claim: IdentityUserClaim) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user_claim, "user_claim")
        return await self._write(PendingCommand(
            query=USER_CLAIM_DELETE,
            args=(user_claim.id,),
            identifier=user_claim.id,
            entity=user_claim,
            check_rows=True,
        ))

    async def find_by_id(self, claim_id: Any) -> Optional[IdentityUserClaim]:
        self.throw_if_disposed()
        return await self._fetchrow(USER_CLAIM_GET_BY_ID, claim_id)

    async def find_by_user_id(self, user_id: Any) -> List[IdentityUserClaim]:
        self.throw_if_disposed()
        return await self._fetch(USER_CLAIM_GET_BY_USER_ID, user_id)

    async def find_by_claim(self, claim_type: str, claim_value: str) -> List[IdentityUserClaim]:
        self.throw_if_disposed()
        return await self._fetch(USER_CLAIM_GET_BY_CLAIM, claim_type, claim_value)

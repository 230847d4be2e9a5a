"""In-memory role and role claim repositories."""

from typing import Any, List, Optional

from ....core.exceptions import ConcurrencyError, DuplicateEntityError
from ....core.shared import IdentityResult
from ....utils.uuid import generate_stamp
from ...database.repositories.base import InMemoryRepositoryBase, InMemoryRowRepositoryBase
from ..entities import IdentityRole, IdentityRoleClaim
from .base import RoleRepositoryBase


class InMemoryRoleRepository(RoleRepositoryBase, InMemoryRepositoryBase[IdentityRole]):
    """In-memory implementation of RoleRepository protocol."""

    async def create(self, role: IdentityRole) -> IdentityResult:
        self._check(role)
        snapshot = self._copy(role)

        def operation():
            if snapshot.id in self._store:
                raise DuplicateEntityError(self.entity_name, "id", snapshot.id)
            self._store[snapshot.id] = snapshot

        return self._commit(operation, role)

    async def update(self, role: IdentityRole) -> IdentityResult:
        self._check(role)
        expected_stamp = role.concurrency_stamp
        snapshot = self._copy(role)
        snapshot.concurrency_stamp = generate_stamp()

        def operation():
            current = self._store.get(snapshot.id)
            if current is None or current.concurrency_stamp != expected_stamp:
                raise ConcurrencyError(self.entity_name, snapshot.id)
            self._store[snapshot.id] = snapshot

        result = self._commit(operation, role)
        if result.succeeded:
            role.concurrency_stamp = snapshot.concurrency_stamp
        return result

    async def delete(self, role: IdentityRole) -> IdentityResult:
        self._check(role)
        expected_stamp = role.concurrency_stamp
        role_id = role.id

        def operation():
            current = self._store.get(role_id)
            if current is None or current.concurrency_stamp != expected_stamp:
                raise ConcurrencyError(self.entity_name, role_id)
            del self._store[role_id]

        return self._commit(operation, role)

    async def find_by_id(self, role_id: Any) -> Optional[IdentityRole]:
        self.throw_if_disposed()
        self._require(role_id, "role_id")
        return self._get(role_id)

    async def find_by_name(self, normalized_name: str) -> Optional[IdentityRole]:
        self.throw_if_disposed()
        self._require(normalized_name, "normalized_name")
        matches = self._select(lambda r: r.normalized_name == normalized_name)
        return matches[0] if matches else None

    async def list_roles(self) -> List[IdentityRole]:
        self.throw_if_disposed()
        return self._select(lambda r: True)


class InMemoryRoleClaimRepository(InMemoryRowRepositoryBase[IdentityRoleClaim]):
    """In-memory implementation of RoleClaimRepository protocol."""

    entity_name = "RoleClaim"

    async def create(self, role_claim: IdentityRoleClaim) -> IdentityResult:
        return self._insert(role_claim)

    async def update(self, role_claim: IdentityRoleClaim) -> IdentityResult:
        return self._replace(role_claim)

    async def delete(self, role_claim: IdentityRoleClaim) -> IdentityResult:
        return self._remove(role_claim)

    async def find_by_id(self, claim_id: Any) -> Optional[IdentityRoleClaim]:
        self.throw_if_disposed()
        return self._get(claim_id)

    async def find_by_role_id(self, role_id: Any) -> List[IdentityRoleClaim]:
        self.throw_if_disposed()
        return self._select(lambda c: c.role_id == role_id)

"""In-memory user, user claim and user role repositories.

Useful for tests and for hosts without a relational store. Name and
membership uniqueness are not enforced here; only duplicate keys are
rejected.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ....core.exceptions import ConcurrencyError, DuplicateEntityError
from ....core.shared import IdentityErrorDescriber, IdentityResult
from ....utils.datetime import ensure_utc
from ....utils.uuid import generate_stamp
from ...database.repositories.base import InMemoryRepositoryBase, InMemoryRowRepositoryBase
from ..entities import IdentityUser, IdentityUserClaim, IdentityUserRole
from .base import UserRepositoryBase


class InMemoryUserRepository(UserRepositoryBase, InMemoryRepositoryBase[IdentityUser]):
    """In-memory implementation of UserRepository protocol."""

    def __init__(
        self,
        store: Optional[Dict[Any, IdentityUser]] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        auto_save_changes: bool = True,
    ):
        super().__init__(store, error_describer, auto_save_changes)

    async def create(self, user: IdentityUser) -> IdentityResult:
        self._check(user)
        user.security_stamp = generate_stamp()
        snapshot = self._copy(user)

        def operation():
            if snapshot.id in self._store:
                raise DuplicateEntityError(self.entity_name, "id", snapshot.id)
            self._store[snapshot.id] = snapshot

        return self._commit(operation, user)

    async def update(self, user: IdentityUser) -> IdentityResult:
        self._check(user)
        expected_stamp = user.concurrency_stamp
        snapshot = self._copy(user)
        snapshot.concurrency_stamp = generate_stamp()

        def operation():
            current = self._store.get(snapshot.id)
            if current is None or current.concurrency_stamp != expected_stamp:
                raise ConcurrencyError(self.entity_name, snapshot.id)
            self._store[snapshot.id] = snapshot

        result = self._commit(operation, user)
        if result.succeeded:
            user.concurrency_stamp = snapshot.concurrency_stamp
        return result

    async def delete(self, user: IdentityUser) -> IdentityResult:
        self._check(user)
        expected_stamp = user.concurrency_stamp
        user_id = user.id

        def operation():
            current = self._store.get(user_id)
            if current is None or current.concurrency_stamp != expected_stamp:
                raise ConcurrencyError(self.entity_name, user_id)
            del self._store[user_id]

        return self._commit(operation, user)

    async def find_by_id(self, user_id: Any) -> Optional[IdentityUser]:
        self.throw_if_disposed()
        self._require(user_id, "user_id")
        return self._get(user_id)

    async def find_by_name(self, normalized_user_name: str) -> Optional[IdentityUser]:
        self.throw_if_disposed()
        self._require(normalized_user_name, "normalized_user_name")
        matches = self._select(lambda u: u.normalized_user_name == normalized_user_name)
        return matches[0] if matches else None

    async def find_by_email(self, normalized_email: str) -> List[IdentityUser]:
        self.throw_if_disposed()
        self._require(normalized_email, "normalized_email")
        return self._select(lambda u: u.normalized_email == normalized_email)

    async def list_users(self) -> List[IdentityUser]:
        self.throw_if_disposed()
        return self._select(lambda u: True)

    async def increment_access_failed_count(self, user: IdentityUser) -> int:
        self._check(user)
        current = self._store.get(user.id)
        if current is None:
            raise ConcurrencyError(self.entity_name, user.id)
        current.access_failed_count += 1
        current.concurrency_stamp = generate_stamp()

        user.access_failed_count = current.access_failed_count
        user.concurrency_stamp = current.concurrency_stamp
        return user.access_failed_count

    async def lock_out(self, user: IdentityUser, lockout_end: datetime) -> None:
        self._check(user)
        current = self._store.get(user.id)
        if current is None:
            raise ConcurrencyError(self.entity_name, user.id)
        current.lockout_end = ensure_utc(lockout_end)
        current.access_failed_count = 0
        current.concurrency_stamp = generate_stamp()

        user.lockout_end = current.lockout_end
        user.access_failed_count = 0
        user.concurrency_stamp = current.concurrency_stamp


class InMemoryUserClaimRepository(InMemoryRowRepositoryBase[IdentityUserClaim]):
    """In-memory implementation of UserClaimRepository protocol."""

    entity_name = "UserClaim"

    async def create(self, user_claim: IdentityUserClaim) -> IdentityResult:
        return self._insert(user_claim)

    async def update(self, user_claim: IdentityUserClaim) -> IdentityResult:
        return self._replace(user_claim)

    async def delete(self, user_claim: IdentityUserClaim) -> IdentityResult:
        return self._remove(user_claim)

    async def find_by_id(self, claim_id: Any) -> Optional[IdentityUserClaim]:
        self.throw_if_disposed()
        return self._get(claim_id)

    async def find_by_user_id(self, user_id: Any) -> List[IdentityUserClaim]:
        self.throw_if_disposed()
        return self._select(lambda c: c.user_id == user_id)

    async def find_by_claim(self, claim_type: str, claim_value: str) -> List[IdentityUserClaim]:
        self.throw_if_disposed()
        return self._select(lambda c: c.claim_type == claim_type and c.claim_value == claim_value)


class InMemoryUserRoleRepository(InMemoryRowRepositoryBase[IdentityUserRole]):
    """In-memory implementation of UserRoleRepository protocol."""

    entity_name = "UserRole"

    async def create(self, user_role: IdentityUserRole) -> IdentityResult:
        return self._insert(user_role)

    async def update(self, user_role: IdentityUserRole) -> IdentityResult:
        return self._replace(user_role)

    async def delete(self, user_role: IdentityUserRole) -> IdentityResult:
        return self._remove(user_role)

    async def find_by_id(self, user_role_id: Any) -> Optional[IdentityUserRole]:
        self.throw_if_disposed()
        return self._get(user_role_id)

    async def find(self, user_id: Any, role_id: Any) -> Optional[IdentityUserRole]:
        self.throw_if_disposed()
        matches = self._select(lambda r: r.user_id == user_id and r.role_id == role_id)
        return matches[0] if matches else None

    async def find_by_user_id(self, user_id: Any) -> List[IdentityUserRole]:
        self.throw_if_disposed()
        return self._select(lambda r: r.user_id == user_id)

    async def find_by_role_id(self, role_id: Any) -> List[IdentityUserRole]:
        self.throw_if_disposed()
        return self._select(lambda r: r.role_id == role_id)

"""AsyncPG-based user repository implementation.

Concrete implementation of the UserRepository protocol using AsyncPG.
Updates and deletes match on the caller's concurrency stamp; a statement
affecting zero rows is reported as a ConcurrencyFailure result.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional, Type

from ....config.constants import DatabaseSchemas
from ....core.exceptions import ConcurrencyError, DatabaseError
from ....core.shared import IdentityErrorDescriber, IdentityResult
from ....utils.datetime import ensure_utc
from ....utils.uuid import generate_stamp
from ...database.repositories.base import AsyncPGRepositoryBase, PendingCommand
from ...database.utils.queries import (
    USER_COLUMNS,
    USER_DELETE,
    USER_GET_BY_ID,
    USER_GET_BY_NORMALIZED_EMAIL,
    USER_GET_BY_NORMALIZED_NAME,
    USER_INCREMENT_ACCESS_FAILED,
    USER_INSERT,
    USER_LIST,
    USER_LOCK_OUT,
    USER_UPDATE,
    USER_UPDATE_COLUMNS,
)
from ..entities import IdentityUser
from .base import UserRepositoryBase


logger = logging.getLogger(__name__)


class AsyncPGUserRepository(UserRepositoryBase, AsyncPGRepositoryBase[IdentityUser]):
    """AsyncPG implementation of UserRepository protocol."""

    entity_type = IdentityUser
    columns = USER_COLUMNS

    def __init__(
        self,
        db,
        schema: str = DatabaseSchemas.IDENTITY,
        entity_type: Optional[Type[IdentityUser]] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        auto_save_changes: bool = True,
    ):
        super().__init__(db, schema, entity_type, error_describer, auto_save_changes)

    async def create(self, user: IdentityUser) -> IdentityResult:
        self._check(user)
        user.security_stamp = generate_stamp()
        user.lockout_end = ensure_utc(user.lockout_end)
        result = await self._write(PendingCommand(
            query=USER_INSERT,
            args=tuple(self._entity_values(user)),
            identifier=user.id,
            entity=user,
        ))
        if result.succeeded:
            logger.info(f"Stored user {user.id} in {self.schema}")
        return result

    async def update(self, user: IdentityUser) -> IdentityResult:
        self._check(user)
        user.lockout_end = ensure_utc(user.lockout_end)
        new_stamp = generate_stamp()
        args = (
            user.id,
            user.concurrency_stamp,
            *[getattr(user, column) for column in USER_UPDATE_COLUMNS],
            new_stamp,
        )
        result = await self._write(PendingCommand(
            query=USER_UPDATE,
            args=args,
            identifier=user.id,
            entity=user,
            check_rows=True,
        ))
        if result.succeeded:
            user.concurrency_stamp = new_stamp
        return result

    async def delete(self, user: IdentityUser) -> IdentityResult:
        self._check(user)
        return await self._write(PendingCommand(
            query=USER_DELETE,
            args=(user.id, user.concurrency_stamp),
            identifier=user.id,
            entity=user,
            check_rows=True,
        ))

    async def find_by_id(self, user_id: Any) -> Optional[IdentityUser]:
        self.throw_if_disposed()
        self._require(user_id, "user_id")
        return await self._fetchrow(USER_GET_BY_ID, user_id)

    async def find_by_name(self, normalized_user_name: str) -> Optional[IdentityUser]:
        self.throw_if_disposed()
        self._require(normalized_user_name, "normalized_user_name")
        return await self._fetchrow(USER_GET_BY_NORMALIZED_NAME, normalized_user_name)

    async def find_by_email(self, normalized_email: str) -> List[IdentityUser]:
        self.throw_if_disposed()
        self._require(normalized_email, "normalized_email")
        return await self._fetch(USER_GET_BY_NORMALIZED_EMAIL, normalized_email)

    async def list_users(self) -> List[IdentityUser]:
        self.throw_if_disposed()
        return await self._fetch(USER_LIST)

    async def _fetch_counter_row(self, query: str, *args):
        try:
            return await self.db.fetchrow(self._query(query), *args)
        except Exception as e:
            logger.error(f"Failed to update lockout counters for user {args[0]}: {e}")
            raise DatabaseError(f"Failed to update lockout counters: {e}") from e

    async def increment_access_failed_count(self, user: IdentityUser) -> int:
        self._check(user)
        row = await self._fetch_counter_row(USER_INCREMENT_ACCESS_FAILED, user.id, generate_stamp())
        if row is None:
            raise ConcurrencyError(self.entity_name, user.id)

        user.access_failed_count = row["access_failed_count"]
        user.concurrency_stamp = row["concurrency_stamp"]
        return user.access_failed_count

    async def lock_out(self, user: IdentityUser, lockout_end: datetime) -> None:
        self._check(user)
        row = await self._fetch_counter_row(
            USER_LOCK_OUT, user.id, ensure_utc(lockout_end), generate_stamp()
        )
        if row is None:
            raise ConcurrencyError(self.entity_name, user.id)

        user.lockout_end = ensure_utc(row["lockout_end"])
        user.access_failed_count = row["access_failed_count"]
        user.concurrency_stamp = row["concurrency_stamp"]

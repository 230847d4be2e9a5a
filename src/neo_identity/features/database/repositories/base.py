"""Shared repository plumbing.

RepositoryBase carries the behaviour every identity repository shares:
disposal, the auto-save switch and the conversion of concurrency conflicts
into failed results. InMemoryRepositoryBase and AsyncPGRepositoryBase add the
backend-specific commit paths.
"""

import copy
import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

import asyncpg

from ....core.exceptions import (
    ConcurrencyError,
    DatabaseError,
    DuplicateEntityError,
    ObjectDisposedError,
)
from ....core.shared import IdentityErrorDescriber, IdentityResult
from ....config.constants import DatabaseSchemas


logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity")


class RepositoryBase:
    """Disposal, auto-save and concurrency-result handling."""

    entity_name = "Entity"

    def __init__(
        self,
        error_describer: Optional[IdentityErrorDescriber] = None,
        auto_save_changes: bool = True,
    ):
        self.error_describer = error_describer or IdentityErrorDescriber()
        self.auto_save_changes = auto_save_changes
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def throw_if_disposed(self) -> None:
        if self._disposed:
            raise ObjectDisposedError(type(self).__name__)

    def dispose(self) -> None:
        """Release the repository. Later calls raise ObjectDisposedError."""
        self._disposed = True

    @staticmethod
    def _require(value: Any, name: str) -> None:
        if value is None:
            raise ValueError(f"{name} cannot be None")

    def _concurrency_failure(self, error: ConcurrencyError) -> IdentityResult:
        logger.warning(f"Concurrency conflict: {error.message}")
        return IdentityResult.failed(self.error_describer.concurrency_failure())

    def _duplicate_failure(self, entity: Any, error: DuplicateEntityError) -> IdentityResult:
        """Map a unique-constraint violation to a failed result."""
        logger.warning(f"Duplicate {self.entity_name}: {error.message}")
        return IdentityResult.failed(self.error_describer.default_error())

    async def save_changes(self) -> IdentityResult:
        """Commit staged mutations when auto-save is disabled."""
        raise NotImplementedError


class InMemoryRepositoryBase(RepositoryBase, Generic[TEntity]):
    """Keyed in-memory storage holding private copies of entities.

    Stored rows are copies so that callers must go through ``update`` to
    persist changes, the same as with a relational backend. Several
    repositories may share one ``store`` dict to act on the same data.
    """

    def __init__(
        self,
        store: Optional[Dict[Any, TEntity]] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        auto_save_changes: bool = True,
    ):
        super().__init__(error_describer, auto_save_changes)
        self._store: Dict[Any, TEntity] = store if store is not None else {}
        self._pending: List[Callable[[], None]] = []

    @property
    def store(self) -> Dict[Any, TEntity]:
        return self._store

    @staticmethod
    def _copy(entity: TEntity) -> TEntity:
        return copy.copy(entity)

    def _get(self, key: Any) -> Optional[TEntity]:
        entity = self._store.get(key)
        return self._copy(entity) if entity is not None else None

    def _select(self, predicate: Callable[[TEntity], bool]) -> List[TEntity]:
        return [self._copy(entity) for entity in self._store.values() if predicate(entity)]

    def _commit(self, operation: Callable[[], None], entity: Any = None) -> IdentityResult:
        if not self.auto_save_changes:
            self._pending.append(operation)
            return IdentityResult.success()
        try:
            operation()
        except ConcurrencyError as e:
            return self._concurrency_failure(e)
        except DuplicateEntityError as e:
            return self._duplicate_failure(entity, e)
        return IdentityResult.success()

    async def save_changes(self) -> IdentityResult:
        self.throw_if_disposed()
        pending, self._pending = self._pending, []
        try:
            for operation in pending:
                operation()
        except ConcurrencyError as e:
            return self._concurrency_failure(e)
        except DuplicateEntityError as e:
            return self._duplicate_failure(None, e)
        return IdentityResult.success()


@dataclass
class PendingCommand:
    """A write statement staged for execution."""

    query: str
    args: Tuple[Any, ...]
    identifier: Any = None
    entity: Any = None
    # A statement affecting zero rows is a concurrency conflict
    check_rows: bool = False


def affected_rows(status: Optional[str]) -> int:
    """Parse the row count out of an asyncpg command status such as ``UPDATE 1``."""
    if not status:
        return 0
    try:
        return int(status.split()[-1])
    except (ValueError, IndexError):
        return 0


class AsyncPGRepositoryBase(RepositoryBase, Generic[TEntity]):
    """AsyncPG plumbing shared by the relational repositories.

    ``db`` is an asyncpg Pool (anything exposing ``fetchrow``, ``fetch``,
    ``execute`` and ``acquire``). SQL templates are formatted with the
    configured schema name.
    """

    entity_type: Type[TEntity]
    columns: Sequence[str] = ()

    def __init__(
        self,
        db,
        schema: str = DatabaseSchemas.IDENTITY,
        entity_type: Optional[Type[TEntity]] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        auto_save_changes: bool = True,
    ):
        super().__init__(error_describer, auto_save_changes)
        self.db = db
        self.schema = schema
        if entity_type is not None:
            self.entity_type = entity_type
        self._pending: List[PendingCommand] = []

    def _query(self, template: str) -> str:
        return template.format(schema=self.schema)

    def _row_to_entity(self, row: asyncpg.Record) -> TEntity:
        """Build an entity from a row, matching columns to dataclass fields."""
        values = dict(row)
        return self.entity_type(**{f.name: values[f.name] for f in fields(self.entity_type) if f.name in values})

    def _entity_values(self, entity: TEntity) -> List[Any]:
        return [getattr(entity, column) for column in self.columns]

    async def _fetchrow(self, query: str, *args) -> Optional[TEntity]:
        try:
            row = await self.db.fetchrow(self._query(query), *args)
        except Exception as e:
            logger.error(f"Failed to fetch {self.entity_name} from {self.schema}: {e}")
            raise DatabaseError(f"Failed to retrieve {self.entity_name}: {e}") from e
        return self._row_to_entity(row) if row else None

    async def _fetch(self, query: str, *args) -> List[TEntity]:
        try:
            rows = await self.db.fetch(self._query(query), *args)
        except Exception as e:
            logger.error(f"Failed to list {self.entity_name} from {self.schema}: {e}")
            raise DatabaseError(f"Failed to retrieve {self.entity_name}: {e}") from e
        return [self._row_to_entity(row) for row in rows]

    async def _run(self, executor, command: PendingCommand) -> None:
        try:
            status = await executor.execute(self._query(command.query), *command.args)
        except asyncpg.exceptions.UniqueViolationError as e:
            raise DuplicateEntityError(
                self.entity_name, e.constraint_name or "key", command.identifier
            ) from e
        except Exception as e:
            logger.error(f"Failed to write {self.entity_name} to {self.schema}: {e}")
            raise DatabaseError(f"Failed to write {self.entity_name}: {e}") from e

        if command.check_rows and affected_rows(status) == 0:
            raise ConcurrencyError(self.entity_name, command.identifier)

    async def _write(self, command: PendingCommand) -> IdentityResult:
        if not self.auto_save_changes:
            self._pending.append(command)
            return IdentityResult.success()
        try:
            await self._run(self.db, command)
        except ConcurrencyError as e:
            return self._concurrency_failure(e)
        except DuplicateEntityError as e:
            return self._duplicate_failure(command.entity, e)
        return IdentityResult.success()

    async def save_changes(self) -> IdentityResult:
        """Run every staged command in one transaction."""
        self.throw_if_disposed()
        pending, self._pending = self._pending, []
        if not pending:
            return IdentityResult.success()

        command = None
        try:
            async with self.db.acquire() as conn:
                async with conn.transaction():
                    for command in pending:
                        await self._run(conn, command)
        except ConcurrencyError as e:
            return self._concurrency_failure(e)
        except DuplicateEntityError as e:
            return self._duplicate_failure(command.entity if command else None, e)

        logger.info(f"Saved {len(pending)} staged {self.entity_name} change(s)")
        return IdentityResult.success()


class InMemoryRowRepositoryBase(InMemoryRepositoryBase[TEntity]):
    """Keyed rows without concurrency stamps (claims and memberships)."""

    def _insert(self, entity: TEntity) -> IdentityResult:
        self.throw_if_disposed()
        self._require(entity, self.entity_name)
        snapshot = self._copy(entity)

        def operation():
            if snapshot.id in self._store:
                raise DuplicateEntityError(self.entity_name, "id", snapshot.id)
            self._store[snapshot.id] = snapshot

        return self._commit(operation, entity)

    def _replace(self, entity: TEntity) -> IdentityResult:
        self.throw_if_disposed()
        self._require(entity, self.entity_name)
        snapshot = self._copy(entity)

        def operation():
            if snapshot.id not in self._store:
                raise ConcurrencyError(self.entity_name, snapshot.id)
            self._store[snapshot.id] = snapshot

        return self._commit(operation, entity)

    def _remove(self, entity: TEntity) -> IdentityResult:
        self.throw_if_disposed()
        self._require(entity, self.entity_name)
        key = entity.id

        def operation():
            if self._store.pop(key, None) is None:
                raise ConcurrencyError(self.entity_name, key)

        return self._commit(operation, entity)

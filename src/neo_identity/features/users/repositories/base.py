"""Entity accessors shared by every user repository.

Getters and setters act on the in-hand entity; callers persist the change
with ``update``. Only the failure counter operations touch storage directly,
because they must be atomic.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Any, Optional

from ....core.exceptions import DuplicateEntityError
from ....core.shared import IdentityResult
from ....utils.datetime import ensure_utc
from ....utils.uuid import generate_stamp
from ..entities import IdentityUser


class UserRepositoryBase:
    """Accessor half of the UserRepository protocol.

    Mixed into a backend base class that provides ``throw_if_disposed``,
    ``_require`` and ``error_describer``.
    """

    entity_name = "User"

    def _check(self, user: IdentityUser) -> None:
        self.throw_if_disposed()
        self._require(user, "user")

    def _duplicate_failure(self, entity: Any, error: DuplicateEntityError) -> IdentityResult:
        if "user_name" in error.field_name and entity is not None:
            return IdentityResult.failed(self.error_describer.duplicate_user_name(entity.user_name))
        return IdentityResult.failed(self.error_describer.default_error())

    async def get_user_id(self, user: IdentityUser) -> Any:
        self._check(user)
        return user.id

    async def get_user_name(self, user: IdentityUser) -> Optional[str]:
        self._check(user)
        return user.user_name

    async def set_user_name(self, user: IdentityUser, user_name: Optional[str]) -> None:
        self._check(user)
        user.user_name = user_name

    async def get_normalized_user_name(self, user: IdentityUser) -> Optional[str]:
        self._check(user)
        return user.normalized_user_name

    async def set_normalized_user_name(self, user: IdentityUser, normalized_name: Optional[str]) -> None:
        self._check(user)
        user.normalized_user_name = normalized_name

    async def get_password_hash(self, user: IdentityUser) -> Optional[str]:
        self._check(user)
        return user.password_hash

    async def set_password_hash(self, user: IdentityUser, password_hash: Optional[str]) -> None:
        self._check(user)
        user.password_hash = password_hash
        user.security_stamp = generate_stamp()

    async def has_password(self, user: IdentityUser) -> bool:
        self._check(user)
        return bool(user.password_hash)

    async def get_access_failed_count(self, user: IdentityUser) -> int:
        self._check(user)
        return user.access_failed_count

    async def reset_access_failed_count(self, user: IdentityUser) -> None:
        self._check(user)
        user.access_failed_count = 0

    async def get_lockout_enabled(self, user: IdentityUser) -> bool:
        self._check(user)
        return user.lockout_enabled

    async def set_lockout_enabled(self, user: IdentityUser, enabled: bool) -> None:
        self._check(user)
        user.lockout_enabled = enabled

    async def get_lockout_end(self, user: IdentityUser) -> Optional[datetime]:
        self._check(user)
        return ensure_utc(user.lockout_end)

    async def set_lockout_end(self, user: IdentityUser, lockout_end: Optional[datetime]) -> None:
        self._check(user)
        user.lockout_end = ensure_utc(lockout_end)

    @abstractmethod
    async def increment_access_failed_count(self, user: IdentityUser) -> int:
        ...

    @abstractmethod
    async def lock_out(self, user: IdentityUser, lockout_end: datetime) -> None:
        ...

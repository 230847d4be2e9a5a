"""Protocol interfaces for the user feature.

Managers depend only on these contracts, so the backing store can be swapped
between the relational and in-memory implementations.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Any, List, Optional, Protocol, runtime_checkable

from ....core.shared import IdentityResult
from .user import IdentityUser
from .user_claim import IdentityUserClaim
from .user_role import IdentityUserRole


@runtime_checkable
class UserRepository(Protocol):
    """Protocol for user persistence and entity accessors."""

    auto_save_changes: bool

    @abstractmethod
    async def create(self, user: IdentityUser) -> IdentityResult:
        """Persist a new user, assigning its security stamp."""
        ...

    @abstractmethod
    async def update(self, user: IdentityUser) -> IdentityResult:
        """Persist changes, failing with ConcurrencyFailure on a stale stamp."""
        ...

    @abstractmethod
    async def delete(self, user: IdentityUser) -> IdentityResult:
        """Remove a user."""
        ...

    @abstractmethod
    async def find_by_id(self, user_id: Any) -> Optional[IdentityUser]:
        """Find a user by key."""
        ...

    @abstractmethod
    async def find_by_name(self, normalized_user_name: str) -> Optional[IdentityUser]:
        """Find a user by normalized user name."""
        ...

    @abstractmethod
    async def find_by_email(self, normalized_email: str) -> List[IdentityUser]:
        """Find users by normalized email."""
        ...

    @abstractmethod
    async def list_users(self) -> List[IdentityUser]:
        """List every user."""
        ...

    @abstractmethod
    async def get_user_id(self, user: IdentityUser) -> Any: ...

    @abstractmethod
    async def get_user_name(self, user: IdentityUser) -> Optional[str]: ...

    @abstractmethod
    async def set_user_name(self, user: IdentityUser, user_name: Optional[str]) -> None: ...

    @abstractmethod
    async def get_normalized_user_name(self, user: IdentityUser) -> Optional[str]: ...

    @abstractmethod
    async def set_normalized_user_name(self, user: IdentityUser, normalized_name: Optional[str]) -> None: ...

    @abstractmethod
    async def get_password_hash(self, user: IdentityUser) -> Optional[str]: ...

    @abstractmethod
    async def set_password_hash(self, user: IdentityUser, password_hash: Optional[str]) -> None:
        """Set the hash and rotate the security stamp."""
        ...

    @abstractmethod
    async def has_password(self, user: IdentityUser) -> bool: ...

    @abstractmethod
    async def get_access_failed_count(self, user: IdentityUser) -> int: ...

    @abstractmethod
    async def increment_access_failed_count(self, user: IdentityUser) -> int:
        """Atomically increment the stored counter and return the new value."""
        ...

    @abstractmethod
    async def reset_access_failed_count(self, user: IdentityUser) -> None: ...

    @abstractmethod
    async def get_lockout_enabled(self, user: IdentityUser) -> bool: ...

    @abstractmethod
    async def set_lockout_enabled(self, user: IdentityUser, enabled: bool) -> None: ...

    @abstractmethod
    async def get_lockout_end(self, user: IdentityUser) -> Optional[datetime]: ...

    @abstractmethod
    async def set_lockout_end(self, user: IdentityUser, lockout_end: Optional[datetime]) -> None: ...

    @abstractmethod
    async def lock_out(self, user: IdentityUser, lockout_end: datetime) -> None:
        """Atomically store the lockout end and reset the failure counter."""
        ...

    @abstractmethod
    async def save_changes(self) -> IdentityResult: ...

    @abstractmethod
    def dispose(self) -> None: ...


@runtime_checkable
class UserClaimRepository(Protocol):
    """Protocol for user claim persistence."""

    auto_save_changes: bool

    @abstractmethod
    async def create(self, user_claim: IdentityUserClaim) -> IdentityResult: ...

    @abstractmethod
    async def update(self, user_claim: IdentityUserClaim) -> IdentityResult: ...

    @abstractmethod
    async def delete(self, user_claim: IdentityUserClaim) -> IdentityResult: ...

    @abstractmethod
    async def find_by_id(self, claim_id: Any) -> Optional[IdentityUserClaim]: ...

    @abstractmethod
    async def find_by_user_id(self, user_id: Any) -> List[IdentityUserClaim]: ...

    @abstractmethod
    async def find_by_claim(self, claim_type: str, claim_value: str) -> List[IdentityUserClaim]: ...

    @abstractmethod
    async def save_changes(self) -> IdentityResult: ...

    @abstractmethod
    def dispose(self) -> None: ...


@runtime_checkable
class UserRoleRepository(Protocol):
    """Protocol for user-role membership persistence."""

    auto_save_changes: bool

    @abstractmethod
    async def create(self, user_role: IdentityUserRole) -> IdentityResult: ...

    @abstractmethod
    async def update(self, user_role: IdentityUserRole) -> IdentityResult: ...

    @abstractmethod
    async def delete(self, user_role: IdentityUserRole) -> IdentityResult: ...

    @abstractmethod
    async def find_by_id(self, user_role_id: Any) -> Optional[IdentityUserRole]: ...

    @abstractmethod
    async def find(self, user_id: Any, role_id: Any) -> Optional[IdentityUserRole]:
        """Find the membership row pairing a user and a role."""
        ...

    @abstractmethod
    async def find_by_user_id(self, user_id: Any) -> List[IdentityUserRole]: ...

    @abstractmethod
    async def find_by_role_id(self, role_id: Any) -> List[IdentityUserRole]: ...

    @abstractmethod
    async def save_changes(self) -> IdentityResult: ...

    @abstractmethod
    def dispose(self) -> None: ...

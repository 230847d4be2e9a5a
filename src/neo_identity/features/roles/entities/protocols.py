"""Protocol interfaces for the role feature."""

from abc import abstractmethod
from typing import Any, List, Optional, Protocol, runtime_checkable

from ....core.shared import IdentityResult
from .role import IdentityRole
from .role_claim import IdentityRoleClaim


@runtime_checkable
class RoleRepository(Protocol):
    """Protocol for role persistence and entity accessors."""

    auto_save_changes: bool

    @abstractmethod
    async def create(self, role: IdentityRole) -> IdentityResult: ...

    @abstractmethod
    async def update(self, role: IdentityRole) -> IdentityResult:
        """Persist changes, failing with ConcurrencyFailure on a stale stamp."""
        ...

    @abstractmethod
    async def delete(self, role: IdentityRole) -> IdentityResult: ...

    @abstractmethod
    async def find_by_id(self, role_id: Any) -> Optional[IdentityRole]: ...

    @abstractmethod
    async def find_by_name(self, normalized_name: str) -> Optional[IdentityRole]:
        """Find a role by normalized name."""
        ...

    @abstractmethod
    async def list_roles(self) -> List[IdentityRole]: ...

    @abstractmethod
    async def get_role_id(self, role: IdentityRole) -> Any: ...

    @abstractmethod
    async def get_role_name(self, role: IdentityRole) -> Optional[str]: ...

    @abstractmethod
    async def set_role_name(self, role: IdentityRole, name: Optional[str]) -> None: ...

    @abstractmethod
    async def get_normalized_role_name(self, role: IdentityRole) -> Optional[str]: ...

    @abstractmethod
    async def set_normalized_role_name(self, role: IdentityRole, normalized_name: Optional[str]) -> None: ...

    @abstractmethod
    async def save_changes(self) -> IdentityResult: ...

    @abstractmethod
    def dispose(self) -> None: ...


@runtime_checkable
class RoleClaimRepository(Protocol):
    """Protocol for role claim persistence."""

    auto_save_changes: bool

    @abstractmethod
    async def create(self, role_claim: IdentityRoleClaim) -> IdentityResult: ...

    @abstractmethod
    async def update(self, role_claim: IdentityRoleClaim) -> IdentityResult: ...

    @abstractmethod
    async def delete(self, role_claim: IdentityRoleClaim) -> IdentityResult: ...

    @abstractmethod
    async def find_by_id(self, claim_id: Any) -> Optional[IdentityRoleClaim]: ...

    @abstractmethod
    async def find_by_role_id(self, role_id: Any) -> List[IdentityRoleClaim]: ...

    @abstractmethod
    async def save_changes(self) -> IdentityResult: ...

    @abstractmethod
    def dispose(self) -> None: ...

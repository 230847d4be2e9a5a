"""Protocol interfaces for password hashing and validation."""

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from ....config.constants import PasswordVerificationResult
from ....core.shared import IdentityResult

if TYPE_CHECKING:
    from ...users.entities import IdentityUser


@runtime_checkable
class PasswordHasher(Protocol):
    """Protocol for per-user password hashing."""

    @abstractmethod
    def hash_password(self, user: "IdentityUser", password: str) -> str:
        """Hash a password for the given user."""
        ...

    @abstractmethod
    def verify_hashed_password(
        self,
        user: "IdentityUser",
        hashed_password: Optional[str],
        provided_password: str,
    ) -> PasswordVerificationResult:
        """Compare a provided password with the stored hash."""
        ...


@runtime_checkable
class PasswordValidator(Protocol):
    """Protocol for password policy validation."""

    @abstractmethod
    def validate(self, password: str) -> IdentityResult:
        """Validate a password against the configured policy."""
        ...

"""Structured results for business-rule outcomes."""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple


@dataclass(frozen=True)
class IdentityError:
    """A machine-readable code paired with a human-readable description."""

    code: str
    description: str


@dataclass(frozen=True)
class IdentityResult:
    """Outcome of an identity operation.

    Business-rule failures (weak passwords, duplicate memberships, lockout,
    concurrency conflicts) are returned as failed results and never raised.
    """

    succeeded: bool
    errors: Tuple[IdentityError, ...] = ()

    _success: ClassVar[Optional["IdentityResult"]] = None

    @classmethod
    def success(cls) -> "IdentityResult":
        """Get the shared successful result."""
        if cls._success is None:
            cls._success = cls(succeeded=True)
        return cls._success

    @classmethod
    def failed(cls, *errors: IdentityError) -> "IdentityResult":
        """Create a failed result carrying the given errors."""
        return cls(succeeded=False, errors=tuple(errors))

    @property
    def error_codes(self) -> Tuple[str, ...]:
        return tuple(error.code for error in self.errors)

    def __bool__(self) -> bool:
        return self.succeeded

    def __str__(self) -> str:
        if self.succeeded:
            return "Succeeded"
        return f"Failed : {','.join(self.error_codes)}"

"""Claim value object."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Claim:
    """A (type, value) statement asserted about a user or role.

    Equality and hashing only consider ``type`` and ``value``; the issuer is
    informational.
    """

    type: str
    value: str
    issuer: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.type:
            raise ValueError("Claim type cannot be empty")
        if self.value is None:
            raise ValueError("Claim value cannot be None")

    def __str__(self) -> str:
        return f"{self.type}: {self.value}"

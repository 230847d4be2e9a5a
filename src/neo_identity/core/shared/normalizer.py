"""Lookup normalization for names and emails."""

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class LookupNormalizer(Protocol):
    """Protocol for case-folding keys used in lookups and uniqueness checks."""

    @abstractmethod
    def normalize_name(self, name: Optional[str]) -> Optional[str]:
        """Normalize a user or role name."""
        ...

    @abstractmethod
    def normalize_email(self, email: Optional[str]) -> Optional[str]:
        """Normalize an email address."""
        ...


class UpperInvariantLookupNormalizer:
    """Normalizes keys by upper-casing them."""

    def normalize_name(self, name: Optional[str]) -> Optional[str]:
        if name is None:
            return None
        return name.upper()

    def normalize_email(self, email: Optional[str]) -> Optional[str]:
        if email is None:
            return None
        return email.upper()

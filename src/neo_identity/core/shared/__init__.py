"""Shared building blocks: results, error descriptions and normalization."""

from .disposable import Disposable
from .error_describer import IdentityErrorDescriber
from .normalizer import LookupNormalizer, UpperInvariantLookupNormalizer
from .results import IdentityError, IdentityResult

__all__ = [
    "Disposable",
    "IdentityErrorDescriber",
    "LookupNormalizer",
    "UpperInvariantLookupNormalizer",
    "IdentityError",
    "IdentityResult",
]

"""Value objects module for neo-identity."""

from .claim import Claim

__all__ = ["Claim"]

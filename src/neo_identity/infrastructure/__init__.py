"""Service wiring for neo-identity."""

from .factory import IdentityServiceFactory, IdentityServices

__all__ = ["IdentityServiceFactory", "IdentityServices"]

"""Auth entities."""

from .context import IdentityContext
from .principal import ApplicationIdentity, ApplicationPrincipal

__all__ = ["ApplicationIdentity", "ApplicationPrincipal", "IdentityContext"]

"""Auth feature: principals, request identity context and sign-in."""

from .entities import ApplicationIdentity, ApplicationPrincipal, IdentityContext
from .services import ApplicationPrincipalFactory, SignInManager

__all__ = [
    "ApplicationIdentity",
    "ApplicationPrincipal",
    "IdentityContext",
    "ApplicationPrincipalFactory",
    "SignInManager",
]

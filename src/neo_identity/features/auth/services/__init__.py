"""Auth services."""

from .principal_factory import ApplicationPrincipalFactory
from .sign_in_manager import SignInManager

__all__ = ["ApplicationPrincipalFactory", "SignInManager"]

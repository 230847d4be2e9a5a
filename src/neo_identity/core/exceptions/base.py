"""Base exceptions for neo-identity.

All library exceptions inherit from NeoIdentityError and carry an error code
and structured details. They are reserved for precondition violations and
unexpected storage failures; business-rule failures are reported through
IdentityResult values instead.
"""

from typing import Any, Dict, Optional


class NeoIdentityError(Exception):
    """Base exception for all neo-identity errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: NeoIdentityError) -> Dict[str, Any]:
    """Create standardized error payload from exception.

    Args:
        exception: The neo-identity exception

    Returns:
        Error dictionary suitable for logging or API responses
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }

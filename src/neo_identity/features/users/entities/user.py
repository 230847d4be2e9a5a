"""User entity.

Plain mutable record persisted by a UserRepository. Hosts add profile fields
by subclassing IdentityUser; the relational repositories map columns by
dataclass field name.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ....utils.uuid import generate_stamp, generate_uuid_v7


@dataclass
class IdentityUser:
    """A user account in the identity store."""

    user_name: Optional[str] = None
    id: Any = field(default_factory=generate_uuid_v7)
    normalized_user_name: Optional[str] = None
    password_hash: Optional[str] = None

    email: Optional[str] = None
    normalized_email: Optional[str] = None
    email_confirmed: bool = False

    phone_number: Optional[str] = None
    phone_number_confirmed: bool = False

    # Lockout
    lockout_enabled: bool = False
    lockout_end: Optional[datetime] = None
    access_failed_count: int = 0

    # Rotated on every persisted change
    concurrency_stamp: str = field(default_factory=generate_stamp)
    # Rotated whenever credentials change
    security_stamp: Optional[str] = None

    two_factor_enabled: bool = False

    def __str__(self) -> str:
        return self.user_name or ""

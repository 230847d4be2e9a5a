"""User-role association entity."""

from dataclasses import dataclass, field
from typing import Any

from ....utils.uuid import generate_uuid_v7


@dataclass
class IdentityUserRole:
    """Pairs a user key with a role key."""

    user_id: Any = None
    role_id: Any = None
    id: Any = field(default_factory=generate_uuid_v7)

"""Role entity."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ....utils.uuid import generate_stamp, generate_uuid_v7


@dataclass
class IdentityRole:
    """A named role users can be members of."""

    name: Optional[str] = None
    id: Any = field(default_factory=generate_uuid_v7)
    normalized_name: Optional[str] = None
    concurrency_stamp: str = field(default_factory=generate_stamp)

    def __str__(self) -> str:
        return self.name or ""

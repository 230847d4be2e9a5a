"""User claim entity."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ....core.value_objects import Claim
from ....utils.uuid import generate_uuid_v7


@dataclass
class IdentityUserClaim:
    """A claim row owned by a user."""

    user_id: Any = None
    claim_type: Optional[str] = None
    claim_value: Optional[str] = None
    id: Any = field(default_factory=generate_uuid_v7)

    def to_claim(self) -> Claim:
        """Convert the row into a Claim value object."""
        return Claim(type=self.claim_type, value=self.claim_value)

    def initialize_from_claim(self, claim: Claim) -> None:
        """Copy type and value from a claim."""
        self.claim_type = claim.type
        self.claim_value = claim.value

    def matches(self, claim: Claim) -> bool:
        return self.claim_type == claim.type and self.claim_value == claim.value

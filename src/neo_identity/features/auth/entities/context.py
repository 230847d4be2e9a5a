"""Request-scoped identity context."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ....utils.datetime import utc_now
from ....utils.uuid import generate_uuid_v7
from .principal import ApplicationPrincipal


@dataclass
class IdentityContext:
    """Carries the current principal through one unit of work.

    Hosts create one context per request (or per task) and pass it to the
    sign-in manager, which installs or clears the principal on it.
    """

    principal: ApplicationPrincipal = field(default_factory=ApplicationPrincipal.anonymous)
    request_id: str = field(default_factory=generate_uuid_v7)
    created_at: datetime = field(default_factory=utc_now)
    signed_in_at: Optional[datetime] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None and self.principal.is_authenticated

    @property
    def user_name(self) -> Optional[str]:
        if not self.is_authenticated:
            return None
        return self.principal.identity.name

"""Claims-based identity and principal."""

from typing import Iterable, List, Optional

from ....config.constants import ClaimTypes
from ....core.value_objects import Claim


class ApplicationIdentity:
    """A set of claims issued for one authentication.

    An identity without an authentication type is anonymous.
    """

    def __init__(
        self,
        claims: Optional[Iterable[Claim]] = None,
        authentication_type: Optional[str] = None,
        name_claim_type: str = ClaimTypes.NAME,
        role_claim_type: str = ClaimTypes.ROLE,
    ):
        self._claims: List[Claim] = list(claims or ())
        self.authentication_type = authentication_type
        self.name_claim_type = name_claim_type
        self.role_claim_type = role_claim_type

    @property
    def claims(self) -> List[Claim]:
        return list(self._claims)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.authentication_type)

    @property
    def name(self) -> Optional[str]:
        claim = self.find_first(self.name_claim_type)
        return claim.value if claim is not None else None

    def add_claim(self, claim: Claim) -> None:
        if claim is None:
            raise ValueError("claim cannot be None")
        self._claims.append(claim)

    def find_first(self, claim_type: str) -> Optional[Claim]:
        return next((c for c in self._claims if c.type == claim_type), None)

    def find_all(self, claim_type: str) -> List[Claim]:
        return [c for c in self._claims if c.type == claim_type]

    def has_claim(self, claim_type: str, value: str) -> bool:
        return any(c.type == claim_type and c.value == value for c in self._claims)

    def __repr__(self) -> str:
        return (
            f"ApplicationIdentity(name={self.name!r}, "
            f"authentication_type={self.authentication_type!r}, claims={len(self._claims)})"
        )


class ApplicationPrincipal:
    """The caller on whose behalf code runs, holding one or more identities."""

    def __init__(self, identity: Optional[ApplicationIdentity] = None):
        self._identities: List[ApplicationIdentity] = [identity or ApplicationIdentity()]

    @classmethod
    def anonymous(cls) -> "ApplicationPrincipal":
        return cls(ApplicationIdentity())

    @property
    def identities(self) -> List[ApplicationIdentity]:
        return list(self._identities)

    @property
    def identity(self) -> ApplicationIdentity:
        """The primary identity."""
        return self._identities[0]

    @property
    def claims(self) -> List[Claim]:
        return [claim for identity in self._identities for claim in identity.claims]

    @property
    def is_authenticated(self) -> bool:
        return self.identity.is_authenticated

    def set_identity(self, identity: ApplicationIdentity) -> None:
        """Replace every identity with the given one."""
        if identity is None:
            raise ValueError("identity cannot be None")
        self._identities = [identity]

    def add_identity(self, identity: ApplicationIdentity) -> None:
        if identity is None:
            raise ValueError("identity cannot be None")
        self._identities.append(identity)

    def is_in_role(self, role: str) -> bool:
        return any(i.has_claim(i.role_claim_type, role) for i in self._identities)

    def has_claim(self, claim_type: str, value: str) -> bool:
        return any(i.has_claim(claim_type, value) for i in self._identities)

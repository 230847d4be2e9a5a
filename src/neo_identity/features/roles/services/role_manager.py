"""Role manager service."""

import logging
from typing import Any, Iterable, List, Optional, Type

from ....core.exceptions import RoleNotFoundError
from ....core.shared import (
    Disposable,
    IdentityErrorDescriber,
    IdentityResult,
    LookupNormalizer,
    UpperInvariantLookupNormalizer,
)
from ....core.value_objects import Claim
from ..entities import IdentityRole, IdentityRoleClaim, RoleClaimRepository, RoleRepository
from .role_validator import RoleValidator


logger = logging.getLogger(__name__)


class RoleManager(Disposable):
    """Orchestrates role persistence, validation and role claims."""

    def __init__(
        self,
        role_repository: RoleRepository,
        role_claim_repository: RoleClaimRepository,
        role_validator: Optional[RoleValidator] = None,
        normalizer: Optional[LookupNormalizer] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        role_claim_type: Type[IdentityRoleClaim] = IdentityRoleClaim,
    ):
        if role_repository is None:
            raise ValueError("role_repository cannot be None")
        if role_claim_repository is None:
            raise ValueError("role_claim_repository cannot be None")

        self.error_describer = error_describer or IdentityErrorDescriber()
        self.role_repository = role_repository
        self.role_claim_repository = role_claim_repository
        self.role_validator = role_validator or RoleValidator(error_describer=self.error_describer)
        self.normalizer = normalizer or UpperInvariantLookupNormalizer()
        self.role_claim_type = role_claim_type

    def _owned_resources(self) -> Iterable[object]:
        return (self.role_repository, self.role_claim_repository)

    @staticmethod
    def _require(value: Any, name: str) -> None:
        if value is None:
            raise ValueError(f"{name} cannot be None")

    async def _ensure_exists(self, role: IdentityRole) -> None:
        self._require(role, "role")
        if not await self.is_role_exists(role):
            logger.error(f"Role {role.name} does not exist")
            raise RoleNotFoundError(role.id)

    async def list_roles(self) -> List[IdentityRole]:
        self.throw_if_disposed()
        return await self.role_repository.list_roles()

    async def create(self, role: IdentityRole) -> IdentityResult:
        """Normalize and persist a new role."""
        self.throw_if_disposed()
        self._require(role, "role")

        role.normalized_name = self.normalize_name(role.name)
        result = await self.role_repository.create(role)
        if result.succeeded:
            logger.info(f"Role {role.name} created")
        else:
            logger.error(f"Role {role.name} creation failed: {result}")
        return result

    async def update(self, role: IdentityRole) -> IdentityResult:
        """Normalize and persist changes to a role."""
        self.throw_if_disposed()
        self._require(role, "role")

        role.normalized_name = self.normalize_name(role.name)
        result = await self.role_repository.update(role)
        if result.succeeded:
            logger.info(f"Role {role.name} updated")
        else:
            logger.error(f"Update of role {role.name} failed: {result}")
        return result

    async def delete(self, role: IdentityRole) -> IdentityResult:
        """Delete a role together with its claims.

        Claims are only removed once the role's concurrency stamp is known
        to be current.
        """
        self.throw_if_disposed()
        self._require(role, "role")

        stored = await self.role_repository.find_by_id(role.id)
        if stored is None or stored.concurrency_stamp != role.concurrency_stamp:
            logger.warning(f"Concurrency conflict deleting role {role.name}")
            return IdentityResult.failed(self.error_describer.concurrency_failure())

        for role_claim in await self.role_claim_repository.find_by_role_id(role.id):
            result = await self.role_claim_repository.delete(role_claim)
            if not result.succeeded:
                logger.error(f"Failed to remove claims of role {role.name}: {result}")
                return result

        result = await self.role_repository.delete(role)
        if result.succeeded:
            logger.info(f"Role {role.name} deleted")
        else:
            logger.error(f"Role {role.name} deletion failed: {result}")
        return result

    async def find_by_id(self, role_id: Any) -> Optional[IdentityRole]:
        self.throw_if_disposed()
        self._require(role_id, "role_id")
        return await self.role_repository.find_by_id(role_id)

    async def find_by_name(self, role_name: str) -> Optional[IdentityRole]:
        """Find a role by name, comparing normalized names."""
        self.throw_if_disposed()
        self._require(role_name, "role_name")
        return await self.role_repository.find_by_name(self.normalize_name(role_name))

    async def get_role_id(self, role: IdentityRole) -> Any:
        self.throw_if_disposed()
        await self._ensure_exists(role)
        return await self.role_repository.get_role_id(role)

    async def get_role_name(self, role: IdentityRole) -> Optional[str]:
        self.throw_if_disposed()
        await self._ensure_exists(role)
        return await self.role_repository.get_role_name(role)

    async def set_role_name(self, role: IdentityRole, name: str) -> IdentityResult:
        """Rename a role.

        The new name is validated before anything is changed; the role is
        left untouched when validation fails.
        """
        self.throw_if_disposed()
        self._require(role, "role")
        self._require(name, "name")

        previous_name = role.name
        role.name = name
        result = await self.validate_role(role)
        role.name = previous_name
        if not result.succeeded:
            return result

        await self.role_repository.set_role_name(role, name)
        await self.role_repository.set_normalized_role_name(role, self.normalize_name(name))
        logger.info(f"Role {previous_name} renamed to {name}")
        return await self.update(role)

    async def validate_role(self, role: IdentityRole) -> IdentityResult:
        self.throw_if_disposed()
        self._require(role, "role")

        result = await self.role_validator.validate(role)
        if not result.succeeded:
            logger.warning(f"Invalid role {role.name}: {result}")
        return result

    def normalize_name(self, name: Optional[str]) -> str:
        """Normalize a role name for lookup."""
        if name is None or not name.strip():
            raise ValueError("Role name cannot be empty")
        return self.normalizer.normalize_name(name)

    async def add_claim(self, role: IdentityRole, claim: Claim) -> IdentityResult:
        self.throw_if_disposed()
        self._require(claim, "claim")
        await self._ensure_exists(role)

        role_claim = self.role_claim_type(role_id=role.id)
        role_claim.initialize_from_claim(claim)
        result = await self.role_claim_repository.create(role_claim)
        if result.succeeded:
            logger.info(f"Claim {claim} added to role {role.name}")
        else:
            logger.error(f"Failed to add claim {claim} to role {role.name}: {result}")
        return result

    async def remove_claim(self, role: IdentityRole, claim: Claim) -> IdentityResult:
        """Remove every row of this role matching the claim.

        Removing a claim the role does not have succeeds.
        """
        self.throw_if_disposed()
        self._require(claim, "claim")
        await self._ensure_exists(role)

        role_claims = await self.role_claim_repository.find_by_role_id(role.id)
        for role_claim in (c for c in role_claims if c.matches(claim)):
            result = await self.role_claim_repository.delete(role_claim)
            if not result.succeeded:
                logger.error(f"Failed to remove claim {claim} from role {role.name}: {result}")
                return result
            logger.info(f"Claim {claim} removed from role {role.name}")

        return IdentityResult.success()

    async def get_claims(self, role: IdentityRole) -> List[Claim]:
        self.throw_if_disposed()
        await self._ensure_exists(role)

        role_claims = await self.role_claim_repository.find_by_role_id(role.id)
        return [role_claim.to_claim() for role_claim in role_claims]

    async def is_role_exists(self, role: IdentityRole) -> bool:
        self.throw_if_disposed()
        self._require(role, "role")
        return await self.role_repository.find_by_id(role.id) is not None

    async def role_name_exists(self, role_name: str) -> bool:
        self.throw_if_disposed()
        return await self.find_by_name(role_name) is not None

"""User manager service.

Coordinates the user, user-claim and user-role repositories with the role
manager, the password hasher and the validators. Precondition violations
(``None`` arguments, unknown users or roles) raise; business-rule failures
come back as failed IdentityResult values.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional, Type

from ....config.constants import IdentityErrorCode, PasswordVerificationResult
from ....config.options import IdentityOptions
from ....core.exceptions import ConcurrencyError, RoleNotFoundError, UserNotFoundError
from ....core.shared import (
    Disposable,
    IdentityErrorDescriber,
    IdentityResult,
    LookupNormalizer,
    UpperInvariantLookupNormalizer,
)
from ....core.value_objects import Claim
from ....utils.datetime import Clock, ensure_utc, utc_now
from ...passwords.entities import PasswordHasher, PasswordValidator as PasswordValidatorProtocol
from ...passwords.services import BcryptPasswordHasher, PasswordValidator
from ...roles.entities import IdentityRole
from ...roles.services import RoleManager
from ..entities import (
    IdentityUser,
    IdentityUserClaim,
    IdentityUserRole,
    UserClaimRepository,
    UserRepository,
    UserRoleRepository,
)
from .user_validator import UserValidator


logger = logging.getLogger(__name__)


class UserManager(Disposable):
    """Orchestrates users, passwords, lockout, claims and role membership."""

    def __init__(
        self,
        user_repository: UserRepository,
        user_claim_repository: UserClaimRepository,
        user_role_repository: UserRoleRepository,
        role_manager: RoleManager,
        password_hasher: Optional[PasswordHasher] = None,
        password_validator: Optional[PasswordValidatorProtocol] = None,
        user_validator: Optional[UserValidator] = None,
        normalizer: Optional[LookupNormalizer] = None,
        error_describer: Optional[IdentityErrorDescriber] = None,
        options: Optional[IdentityOptions] = None,
        clock: Clock = utc_now,
        user_claim_type: Type[IdentityUserClaim] = IdentityUserClaim,
        user_role_type: Type[IdentityUserRole] = IdentityUserRole,
    ):
        for name, dependency in (
            ("user_repository", user_repository),
            ("user_claim_repository", user_claim_repository),
            ("user_role_repository", user_role_repository),
            ("role_manager", role_manager),
        ):
            if dependency is None:
                raise ValueError(f"{name} cannot be None")

        self.options = options or IdentityOptions()
        self.error_describer = error_describer or IdentityErrorDescriber()
        self.normalizer = normalizer or UpperInvariantLookupNormalizer()

        self.user_repository = user_repository
        self.user_claim_repository = user_claim_repository
        self.user_role_repository = user_role_repository
        self.role_manager = role_manager

        self.password_hasher = password_hasher or BcryptPasswordHasher()
        self.password_validator = password_validator or PasswordValidator(
            self.options.password, self.error_describer
        )
        self.user_validator = user_validator or UserValidator(
            self.options.user, self.error_describer, self.normalizer, user_repository
        )
        self.clock = clock
        self.user_claim_type = user_claim_type
        self.user_role_type = user_role_type

    def _owned_resources(self) -> Iterable[object]:
        return (
            self.user_repository,
            self.user_claim_repository,
            self.user_role_repository,
            self.role_manager,
        )

    @staticmethod
    def _require(value: Any, name: str) -> None:
        if value is None:
            raise ValueError(f"{name} cannot be None")

    async def _ensure_exists(self, user: IdentityUser) -> None:
        self.throw_if_disposed()
        self._require(user, "user")
        if not await self.is_user_exist(user):
            logger.error(f"User {user.user_name} not found")
            raise UserNotFoundError(user.id)

    async def _ensure_role_exists(self, role: IdentityRole) -> None:
        self._require(role, "role")
        if not await self.role_manager.is_role_exists(role):
            logger.error(f"Role {role.name} not found")
            raise RoleNotFoundError(role.id)

    def _concurrency_failure(self, error: ConcurrencyError) -> IdentityResult:
        logger.warning(f"Concurrency conflict: {error.message}")
        return IdentityResult.failed(self.error_describer.concurrency_failure())

    # ------------------------------------------------------------------
    # Lifecycle and lookup
    # ------------------------------------------------------------------

    async def create(self, user: IdentityUser, password: str) -> IdentityResult:
        """Create a user with a hashed password.

        Args:
            user: New user; its names are normalized in place
            password: Plaintext password

        Returns:
            Result of persisting the user
        """
        self.throw_if_disposed()
        self._require(user, "user")
        self._require(password, "password")

        self._update_normalized_fields(user)
        user.lockout_enabled = self.options.lockout.allowed_for_new_users
        user.password_hash = self.password_hasher.hash_password(user, password)

        result = await self.user_repository.create(user)
        if result.succeeded:
            logger.info(f"User {user.user_name} created")
        else:
            logger.error(f"User {user.user_name} creation failed: {result}")
        return result

    async def update(self, user: IdentityUser) -> IdentityResult:
        await self._ensure_exists(user)

        self._update_normalized_fields(user)
        result = await self.user_repository.update(user)
        if not result.succeeded:
            logger.error(f"User {user.user_name} update failed: {result}")
            return result

        logger.info(f"User {user.user_name} updated")
        return IdentityResult.success()

    async def delete(self, user: IdentityUser) -> IdentityResult:
        """Delete a user along with its claim and role rows.

        A missing user or a stale concurrency stamp fails with
        ConcurrencyFailure before any claim or role row is touched.
        """
        self.throw_if_disposed()
        self._require(user, "user")

        stored = await self.user_repository.find_by_id(user.id)
        if stored is None or stored.concurrency_stamp != user.concurrency_stamp:
            return self._concurrency_failure(ConcurrencyError("User", user.id))

        for user_claim in await self.user_claim_repository.find_by_user_id(user.id):
            result = await self.user_claim_repository.delete(user_claim)
            if not result.succeeded:
                logger.error(f"Failed to remove claims of user {user.user_name}: {result}")
                return result

        for user_role in await self.user_role_repository.find_by_user_id(user.id):
            result = await self.user_role_repository.delete(user_role)
            if not result.succeeded:
                logger.error(f"Failed to remove roles of user {user.user_name}: {result}")
                return result

        result = await self.user_repository.delete(user)
        if result.succeeded:
            logger.info(f"User {user.user_name} deleted")
        else:
            logger.error(f"User {user.user_name} deletion failed: {result}")
        return result

    async def find_by_id(self, user_id: Any) -> Optional[IdentityUser]:
        self.throw_if_disposed()
        self._require(user_id, "user_id")
        return await self.user_repository.find_by_id(user_id)

    async def find_by_name(self, user_name: str) -> Optional[IdentityUser]:
        self.throw_if_disposed()
        self._require(user_name, "user_name")
        return await self.user_repository.find_by_name(self.normalize_name(user_name))

    async def find_by_email(self, email: str) -> Optional[IdentityUser]:
        """Find the first user owning an email address."""
        self.throw_if_disposed()
        self._require(email, "email")
        users = await self.user_repository.find_by_email(self.normalize_email(email))
        return users[0] if users else None

    async def list_users(self) -> List[IdentityUser]:
        self.throw_if_disposed()
        return await self.user_repository.list_users()

    async def is_user_exist(self, user: IdentityUser) -> bool:
        self.throw_if_disposed()
        self._require(user, "user")
        return await self.user_repository.find_by_id(user.id) is not None

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    async def get_user_id(self, user: IdentityUser) -> Any:
        await self._ensure_exists(user)
        return await self.user_repository.get_user_id(user)

    async def get_user_name(self, user: IdentityUser) -> Optional[str]:
        await self._ensure_exists(user)
        return await self.user_repository.get_user_name(user)

    async def set_user_name(self, user: IdentityUser, user_name: str) -> IdentityResult:
        """Rename a user.

        The user is validated with the new name before anything changes.
        """
        self._require(user_name, "user_name")
        await self._ensure_exists(user)

        previous_name = user.user_name
        user.user_name = user_name
        result = await self.validate_user(user)
        user.user_name = previous_name
        if not result.succeeded:
            return result

        await self.user_repository.set_user_name(user, user_name)
        await self.user_repository.set_normalized_user_name(user, self.normalize_name(user_name))
        logger.info(f"User {previous_name} renamed to {user_name}")
        return await self.update(user)

    def normalize_name(self, name: Optional[str]) -> str:
        if name is None or not name.strip():
            raise ValueError("User name cannot be empty")
        return self.normalizer.normalize_name(name)

    def normalize_email(self, email: Optional[str]) -> Optional[str]:
        return self.normalizer.normalize_email(email)

    def _update_normalized_fields(self, user: IdentityUser) -> None:
        user.normalized_user_name = self.normalize_name(user.user_name)
        user.normalized_email = self.normalize_email(user.email)

    async def validate_user(self, user: IdentityUser) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user, "user")

        result = await self.user_validator.validate(user)
        if not result.succeeded:
            logger.warning(f"User {user.user_name} validation failed: {result}")
        return result

    # ------------------------------------------------------------------
    # Passwords
    # ------------------------------------------------------------------

    async def has_password(self, user: IdentityUser) -> bool:
        await self._ensure_exists(user)
        return await self.user_repository.has_password(user)

    async def add_password(self, user: IdentityUser, password: str) -> IdentityResult:
        self._require(password, "password")
        await self._ensure_exists(user)

        if await self.user_repository.has_password(user):
            logger.warning(f"User {user.user_name} already has a password")
            return IdentityResult.failed(self.error_describer.user_already_has_password())

        return await self.update_password_hash(user, password, True)

    async def change_password(
        self,
        user: IdentityUser,
        current_password: str,
        new_password: str,
    ) -> IdentityResult:
        """Replace a password after verifying the current one."""
        self._require(current_password, "current_password")
        self._require(new_password, "new_password")
        await self._ensure_exists(user)

        verification = await self.verify_password(user, current_password)
        if verification is PasswordVerificationResult.FAILED:
            logger.warning(f"Change password failed for user {user.user_name}: password mismatch")
            return IdentityResult.failed(self.error_describer.password_mismatch())

        return await self.update_password_hash(user, new_password, True)

    async def reset_password(self, user: IdentityUser, new_password: str) -> IdentityResult:
        """Set a new password without checking the current one."""
        self._require(new_password, "new_password")
        await self._ensure_exists(user)
        return await self.update_password_hash(user, new_password, True)

    async def remove_password(self, user: IdentityUser) -> IdentityResult:
        await self._ensure_exists(user)

        await self.user_repository.set_password_hash(user, None)
        logger.info(f"Password removed from user {user.user_name}")
        return await self.update(user)

    async def check_password(self, user: IdentityUser, password: str) -> bool:
        if user is None:
            return False
        result = await self.verify_password(user, password)
        return result is PasswordVerificationResult.SUCCESS

    async def verify_password(self, user: IdentityUser, password: str) -> PasswordVerificationResult:
        self._require(password, "password")
        await self._ensure_exists(user)

        password_hash = await self.user_repository.get_password_hash(user)
        result = self.password_hasher.verify_hashed_password(user, password_hash, password)
        if result is PasswordVerificationResult.FAILED:
            logger.debug(f"Password verification failed for user {user.user_name}")
        return result

    async def validate_password(self, user: IdentityUser, password: str) -> IdentityResult:
        self.throw_if_disposed()
        self._require(user, "user")
        self._require(password, "password")

        result = self.password_validator.validate(password)
        if not result.succeeded:
            logger.warning(f"Password validation failed for user {user.user_name}: {result}")
        return result

    async def update_password_hash(
        self,
        user: IdentityUser,
        new_password: str,
        validate: bool,
    ) -> IdentityResult:
        """Hash and store a new password, optionally validating it first."""
        self._require(new_password, "new_password")
        await self._ensure_exists(user)

        if validate:
            result = await self.validate_password(user, new_password)
            if not result.succeeded:
                return result

        password_hash = self.password_hasher.hash_password(user, new_password)
        await self.user_repository.set_password_hash(user, password_hash)
        logger.info(f"Password hash updated for user {user.user_name}")
        return await self.update(user)

    # ------------------------------------------------------------------
    # Lockout
    # ------------------------------------------------------------------

    async def access_failed(self, user: IdentityUser) -> IdentityResult:
        """Record a failed access attempt.

        The counter is incremented atomically in storage. When lockout is
        enabled and the new count reaches ``max_failed_access_attempts`` the
        user is locked out until ``clock() + default_lockout_time_span`` and
        the counter is reset in the same write.

        Returns:
            Success, UserLockedOut when this attempt locked the user out, or
            ConcurrencyFailure when the user row vanished
        """
        await self._ensure_exists(user)
        lockout = self.options.lockout

        try:
            count = await self.user_repository.increment_access_failed_count(user)
        except ConcurrencyError as e:
            return self._concurrency_failure(e)

        logger.warning(f"User {user.user_name} access failed ({count} attempts)")

        if not await self.user_repository.get_lockout_enabled(user):
            return IdentityResult.success()
        if count < lockout.max_failed_access_attempts:
            return IdentityResult.success()

        lockout_end = self.clock() + lockout.default_lockout_time_span
        try:
            await self.user_repository.lock_out(user, lockout_end)
        except ConcurrencyError as e:
            return self._concurrency_failure(e)

        logger.warning(f"User {user.user_name} locked out until {lockout_end.isoformat()}")
        return IdentityResult.failed(
            self.error_describer.user_locked_out(lockout.max_failed_access_attempts)
        )

    async def get_access_failed_count(self, user: IdentityUser) -> int:
        await self._ensure_exists(user)
        return await self.user_repository.get_access_failed_count(user)

    async def reset_access_failed_count(self, user: IdentityUser) -> IdentityResult:
        await self._ensure_exists(user)

        if await self.user_repository.get_access_failed_count(user) == 0:
            return IdentityResult.success()
        await self.user_repository.reset_access_failed_count(user)
        return await self.update(user)

    async def get_lockout_enabled(self, user: IdentityUser) -> bool:
        await self._ensure_exists(user)
        return await self.user_repository.get_lockout_enabled(user)

    async def set_lockout_enabled(self, user: IdentityUser, enabled: bool) -> IdentityResult:
        await self._ensure_exists(user)

        await self.user_repository.set_lockout_enabled(user, enabled)
        logger.info(f"Lockout {'enabled' if enabled else 'disabled'} for user {user.user_name}")
        return await self.update(user)

    async def get_lockout_end_date(self, user: IdentityUser) -> Optional[datetime]:
        await self._ensure_exists(user)
        return await self.user_repository.get_lockout_end(user)

    async def set_lockout_end_date(
        self,
        user: IdentityUser,
        lockout_end: Optional[datetime],
    ) -> IdentityResult:
        await self._ensure_exists(user)

        if not await self.user_repository.get_lockout_enabled(user):
            logger.warning(f"Lockout is not enabled for user {user.user_name}")
            return IdentityResult.failed(self.error_describer.user_lockout_not_enabled())

        await self.user_repository.set_lockout_end(user, lockout_end)
        return await self.update(user)

    async def is_locked_out(self, user: IdentityUser) -> bool:
        await self._ensure_exists(user)

        if not await self.user_repository.get_lockout_enabled(user):
            return False
        lockout_end = await self.user_repository.get_lockout_end(user)
        if lockout_end is None:
            return False
        return lockout_end > ensure_utc(self.clock())

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    async def add_claim(self, user: IdentityUser, claim: Claim) -> IdentityResult:
        self._require(claim, "claim")
        return await self.add_claims(user, [claim])

    async def add_claims(self, user: IdentityUser, claims: Iterable[Claim]) -> IdentityResult:
        """Attach claims to a user.

        Duplicate (type, value) pairs are stored again; a warning is logged.
        """
        self._require(claims, "claims")
        claims = list(claims)
        for claim in claims:
            self._require(claim, "claim")
        await self._ensure_exists(user)

        existing = await self.user_claim_repository.find_by_user_id(user.id)
        for claim in claims:
            if any(user_claim.matches(claim) for user_claim in existing):
                logger.warning(f"User {user.user_name} already has claim {claim}")

            user_claim = self.user_claim_type(user_id=user.id)
            user_claim.initialize_from_claim(claim)
            result = await self.user_claim_repository.create(user_claim)
            if not result.succeeded:
                logger.error(f"Failed to add claim {claim} to user {user.user_name}: {result}")
                return result
            existing.append(user_claim)
            logger.info(f"Claim {claim} added to user {user.user_name}")

        return IdentityResult.success()

    async def remove_claim(self, user: IdentityUser, claim: Claim) -> IdentityResult:
        self._require(claim, "claim")
        return await self.remove_claims(user, [claim])

    async def remove_claims(self, user: IdentityUser, claims: Iterable[Claim]) -> IdentityResult:
        """Remove claims from a user; claims the user lacks are skipped."""
        self._require(claims, "claims")
        claims = list(claims)
        for claim in claims:
            self._require(claim, "claim")
        # Claims compare by type and value, matching how rows are selected.
        claims = list(dict.fromkeys(claims))
        await self._ensure_exists(user)

        user_claims = await self.user_claim_repository.find_by_user_id(user.id)
        for claim in claims:
            for user_claim in (c for c in user_claims if c.matches(claim)):
                result = await self.user_claim_repository.delete(user_claim)
                if not result.succeeded:
                    logger.error(f"Failed to remove claim {claim} from user {user.user_name}: {result}")
                    return result
                logger.info(f"Claim {claim} removed from user {user.user_name}")

        return IdentityResult.success()

    async def replace_claim(self, user: IdentityUser, claim: Claim, new_claim: Claim) -> IdentityResult:
        """Replace every matching claim row of a user with a new claim."""
        self._require(claim, "claim")
        self._require(new_claim, "new_claim")
        await self._ensure_exists(user)

        user_claims = await self.user_claim_repository.find_by_user_id(user.id)
        for user_claim in (c for c in user_claims if c.matches(claim)):
            user_claim.initialize_from_claim(new_claim)
            result = await self.user_claim_repository.update(user_claim)
            if not result.succeeded:
                logger.error(f"Failed to replace claim {claim} of user {user.user_name}: {result}")
                return result

        logger.info(f"Claim {claim} replaced with {new_claim} for user {user.user_name}")
        return IdentityResult.success()

    async def get_claims(self, user: IdentityUser) -> List[Claim]:
        await self._ensure_exists(user)
        user_claims = await self.user_claim_repository.find_by_user_id(user.id)
        return [user_claim.to_claim() for user_claim in user_claims]

    async def get_users_for_claim(self, claim: Claim) -> List[IdentityUser]:
        self.throw_if_disposed()
        self._require(claim, "claim")

        users: List[IdentityUser] = []
        seen = set()
        for user_claim in await self.user_claim_repository.find_by_claim(claim.type, claim.value):
            if user_claim.user_id in seen:
                continue
            seen.add(user_claim.user_id)
            user = await self.user_repository.find_by_id(user_claim.user_id)
            if user is not None:
                users.append(user)
        return users

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def add_to_role(self, user: IdentityUser, role: IdentityRole) -> IdentityResult:
        return await self.add_to_roles(user, [role])

    async def add_to_roles(self, user: IdentityUser, roles: Iterable[IdentityRole]) -> IdentityResult:
        """Add a user to roles.

        Raises:
            RoleNotFoundError: If any role does not exist
        """
        self._require(roles, "roles")
        roles = list(roles)
        await self._ensure_exists(user)
        for role in roles:
            await self._ensure_role_exists(role)

        for role in roles:
            if await self.user_role_repository.find(user.id, role.id) is not None:
                logger.warning(f"User {user.user_name} already in role {role.name}")
                return IdentityResult.failed(self.error_describer.user_already_in_role(role.name))

            user_role = self.user_role_type(user_id=user.id, role_id=role.id)
            result = await self.user_role_repository.create(user_role)
            if not result.succeeded:
                logger.error(f"Failed to add user {user.user_name} to role {role.name}: {result}")
                # Storage only knows the role key; describe a racing duplicate by name.
                if IdentityErrorCode.USER_ALREADY_IN_ROLE.value in result.error_codes:
                    return IdentityResult.failed(self.error_describer.user_already_in_role(role.name))
                return result
            logger.info(f"User {user.user_name} added to role {role.name}")

        return IdentityResult.success()

    async def remove_from_role(self, user: IdentityUser, role: IdentityRole) -> IdentityResult:
        return await self.remove_from_roles(user, [role])

    async def remove_from_roles(self, user: IdentityUser, roles: Iterable[IdentityRole]) -> IdentityResult:
        """Remove a user from roles; roles the user is not in are skipped."""
        self._require(roles, "roles")
        roles = list(roles)
        await self._ensure_exists(user)
        for role in roles:
            await self._ensure_role_exists(role)

        for role in roles:
            user_role = await self.user_role_repository.find(user.id, role.id)
            if user_role is None:
                continue

            result = await self.user_role_repository.delete(user_role)
            if not result.succeeded:
                logger.error(f"Failed to remove user {user.user_name} from role {role.name}: {result}")
                return result
            logger.info(f"User {user.user_name} removed from role {role.name}")

        return IdentityResult.success()

    async def get_roles(self, user: IdentityUser) -> List[IdentityRole]:
        await self._ensure_exists(user)

        roles: List[IdentityRole] = []
        for user_role in await self.user_role_repository.find_by_user_id(user.id):
            role = await self.role_manager.find_by_id(user_role.role_id)
            if role is not None:
                roles.append(role)
        return roles

    async def is_in_role(self, user: IdentityUser, role: IdentityRole) -> bool:
        await self._ensure_exists(user)
        await self._ensure_role_exists(role)
        return await self.user_role_repository.find(user.id, role.id) is not None

    async def get_users_in_role(self, role: IdentityRole) -> List[IdentityUser]:
        self.throw_if_disposed()
        await self._ensure_role_exists(role)

        users: List[IdentityUser] = []
        for user_role in await self.user_role_repository.find_by_role_id(role.id):
            user = await self.user_repository.find_by_id(user_role.user_id)
            if user is not None:
                users.append(user)
        return users

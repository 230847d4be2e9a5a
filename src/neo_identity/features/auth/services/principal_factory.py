"""Builds principals from stored users, their claims and their roles."""

import logging
from typing import Optional

from ....config.constants import AuthenticationTypes
from ....config.options import ApplicationIdentityOptions
from ....core.exceptions import UserNotFoundError
from ....core.value_objects import Claim
from ...roles.services import RoleManager
from ...users.entities import IdentityUser
from ...users.services import UserManager
from ..entities.principal import ApplicationIdentity, ApplicationPrincipal


logger = logging.getLogger(__name__)


class ApplicationPrincipalFactory:
    """Creates an ApplicationPrincipal for a user."""

    def __init__(
        self,
        user_manager: UserManager,
        role_manager: RoleManager,
        options: Optional[ApplicationIdentityOptions] = None,
    ):
        if user_manager is None:
            raise ValueError("user_manager cannot be None")
        if role_manager is None:
            raise ValueError("role_manager cannot be None")

        self.user_manager = user_manager
        self.role_manager = role_manager
        self.options = options or ApplicationIdentityOptions()

    async def create(self, user: IdentityUser) -> ApplicationPrincipal:
        """Create a principal for an existing user.

        Raises:
            ValueError: If user is None
            UserNotFoundError: If the user is not stored
        """
        if user is None:
            raise ValueError("user cannot be None")
        if await self.user_manager.find_by_id(user.id) is None:
            raise UserNotFoundError(user.id)

        identity = await self.generate_identity(user)
        return ApplicationPrincipal(identity)

    async def generate_identity(self, user: IdentityUser) -> ApplicationIdentity:
        """Collect the user's claims into a password-authenticated identity.

        Order: stored user claims, user id, user name, email (when set), then
        for every role a role claim followed by the role's own claims.
        """
        options = self.options
        claims = await self.user_manager.get_claims(user)
        roles = await self.user_manager.get_roles(user)

        claims.append(Claim(options.user_id_claim_type, str(user.id)))
        claims.append(Claim(options.user_name_claim_type, user.user_name))
        if user.email:
            claims.append(Claim(options.email_claim_type, user.email))

        for role in roles:
            claims.append(Claim(options.role_claim_type, role.name))
            claims.extend(await self.role_manager.get_claims(role))

        logger.debug(f"Generated identity for user {user.user_name} with {len(claims)} claims")
        return ApplicationIdentity(
            claims,
            AuthenticationTypes.PASSWORD,
            options.user_name_claim_type,
            options.role_claim_type,
        )

"""Password sign-in orchestration."""

import logging

from ....config.constants import PasswordVerificationResult, SignInResult
from ...users.entities import IdentityUser
from ...users.services import UserManager
from ..entities.context import IdentityContext
from ..entities.principal import ApplicationPrincipal
from .principal_factory import ApplicationPrincipalFactory


logger = logging.getLogger(__name__)


class SignInManager:
    """Signs users in and out of an IdentityContext."""

    def __init__(self, user_manager: UserManager, principal_factory: ApplicationPrincipalFactory):
        if user_manager is None:
            raise ValueError("user_manager cannot be None")
        if principal_factory is None:
            raise ValueError("principal_factory cannot be None")

        self.user_manager = user_manager
        self.principal_factory = principal_factory

    async def password_sign_in(
        self,
        context: IdentityContext,
        user_name: str,
        password: str,
    ) -> SignInResult:
        """Sign a user in with a user name and password.

        On success the context's principal is replaced with one built for
        the user. Failed password attempts are not counted towards lockout.

        Args:
            context: Context receiving the principal
            user_name: User name as typed
            password: Plaintext password

        Returns:
            SUCCEEDED, INVALID_CREDENTIAL or LOCKED_OUT
        """
        if context is None:
            raise ValueError("context cannot be None")
        if not user_name:
            raise ValueError("user_name cannot be None or empty")
        if password is None:
            raise ValueError("password cannot be None")

        user = await self.user_manager.find_by_name(user_name)
        if user is None:
            logger.info(f"Sign-in failed for unknown user {user_name}")
            return SignInResult.INVALID_CREDENTIAL

        result = await self.check_password_sign_in(user, password)
        if result is not SignInResult.SUCCEEDED:
            return result

        identity = await self.principal_factory.generate_identity(user)
        context.principal = ApplicationPrincipal(identity)
        context.signed_in_at = self.user_manager.clock()
        logger.info(f"User {user.user_name} signed in (request {context.request_id})")
        return SignInResult.SUCCEEDED

    async def check_password_sign_in(self, user: IdentityUser, password: str) -> SignInResult:
        """Check whether a user may sign in with a password, without a context."""
        if user is None:
            raise ValueError("user cannot be None")
        if password is None:
            raise ValueError("password cannot be None")

        verification = await self.user_manager.verify_password(user, password)
        if verification is PasswordVerificationResult.FAILED:
            logger.info(f"Sign-in failed for user {user.user_name}: invalid credential")
            return SignInResult.INVALID_CREDENTIAL

        if await self.user_manager.is_locked_out(user):
            logger.warning(f"Sign-in refused for user {user.user_name}: locked out")
            return SignInResult.LOCKED_OUT

        return SignInResult.SUCCEEDED

    async def sign_out(self, context: IdentityContext) -> None:
        if context is None:
            raise ValueError("context cannot be None")

        user_name = context.user_name
        context.principal = ApplicationPrincipal.anonymous()
        context.signed_in_at = None
        if user_name:
            logger.info(f"User {user_name} signed out (request {context.request_id})")

    def is_signed_in(self, context: IdentityContext) -> bool:
        if context is None:
            raise ValueError("context cannot be None")
        return context.is_authenticated

"""Bcrypt password hasher.

Hashes are keyed per user: the user's key is combined with the plaintext
before hashing, so two accounts with the same password never share a hash
and a hash copied onto another account does not verify.
"""

import base64
import hashlib
import logging
from typing import TYPE_CHECKING, Optional

import bcrypt

from ....config.constants import PasswordVerificationResult, PolicyDefaults

if TYPE_CHECKING:
    from ...users.entities import IdentityUser


logger = logging.getLogger(__name__)


class BcryptPasswordHasher:
    """Password hasher backed by bcrypt."""

    def __init__(self, work_factor: int = PolicyDefaults.BCRYPT_WORK_FACTOR):
        if not PolicyDefaults.BCRYPT_MIN_WORK_FACTOR <= work_factor <= PolicyDefaults.BCRYPT_MAX_WORK_FACTOR:
            raise ValueError(
                f"work_factor must be between {PolicyDefaults.BCRYPT_MIN_WORK_FACTOR} "
                f"and {PolicyDefaults.BCRYPT_MAX_WORK_FACTOR}"
            )
        self.work_factor = work_factor

    @staticmethod
    def _keyed_secret(user: "IdentityUser", password: str) -> bytes:
        # bcrypt reads at most 72 bytes, so digest the keyed password first
        digest = hashlib.sha256(f"{user.id}{password}".encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash_password(self, user: "IdentityUser", password: str) -> str:
        """Hash a password for the given user.

        Args:
            user: Owner of the password; its key salts the hash
            password: Plaintext password

        Returns:
            bcrypt hash string
        """
        if user is None:
            raise ValueError("user cannot be None")
        if password is None:
            raise ValueError("password cannot be None")

        secret = self._keyed_secret(user, password)
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self.work_factor)).decode("utf-8")

    def verify_hashed_password(
        self,
        user: "IdentityUser",
        hashed_password: Optional[str],
        provided_password: str,
    ) -> PasswordVerificationResult:
        """Compare a provided password with the stored hash.

        An empty or malformed stored hash never verifies.
        """
        if user is None:
            raise ValueError("user cannot be None")
        if provided_password is None:
            raise ValueError("provided_password cannot be None")
        if not hashed_password:
            return PasswordVerificationResult.FAILED

        secret = self._keyed_secret(user, provided_password)
        try:
            matched = bcrypt.checkpw(secret, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Stored password hash for user {user.id} is malformed: {e}")
            return PasswordVerificationResult.FAILED

        return PasswordVerificationResult.SUCCESS if matched else PasswordVerificationResult.FAILED

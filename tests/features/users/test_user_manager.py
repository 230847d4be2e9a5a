"""Tests for the user manager."""

import logging
from unittest.mock import AsyncMock

import pytest

from neo_identity.config.constants import IdentityErrorCode, PasswordVerificationResult
from neo_identity.core.exceptions import ObjectDisposedError, RoleNotFoundError, UserNotFoundError
from neo_identity.core.shared import IdentityResult
from neo_identity.core.value_objects import Claim
from neo_identity.features.roles.entities import IdentityRole
from neo_identity.features.users.entities import IdentityUser


PASSWORD = "Passw0rd!"


class TestUserLifecycle:
    """Test creating, finding, updating and deleting users."""

    @pytest.mark.asyncio
    async def test_create_normalizes_and_hashes(self, user_manager, sample_user):
        """Test create fills normalized fields, lockout flag and hash."""
        result = await user_manager.create(sample_user, PASSWORD)

        assert result.succeeded
        assert sample_user.normalized_user_name == "ALICE"
        assert sample_user.normalized_email == "ALICE@CONTOSO.COM"
        assert sample_user.lockout_enabled is True
        assert sample_user.password_hash and sample_user.password_hash != PASSWORD
        assert sample_user.security_stamp is not None

    @pytest.mark.asyncio
    async def test_create_respects_lockout_option(self, user_manager, identity_options):
        """Test new users inherit allowed_for_new_users."""
        identity_options.lockout.allowed_for_new_users = False
        user = IdentityUser(user_name="carol")

        await user_manager.create(user, PASSWORD)

        assert user.lockout_enabled is False

    @pytest.mark.asyncio
    async def test_create_requires_arguments(self, user_manager, sample_user):
        """Test None arguments raise."""
        with pytest.raises(ValueError):
            await user_manager.create(None, PASSWORD)
        with pytest.raises(ValueError):
            await user_manager.create(sample_user, None)

    @pytest.mark.asyncio
    async def test_create_rejects_empty_user_name(self, user_manager):
        """Test an empty name cannot be normalized."""
        with pytest.raises(ValueError):
            await user_manager.create(IdentityUser(user_name="  "), PASSWORD)

    @pytest.mark.asyncio
    async def test_find_by_name_and_email_are_case_insensitive(self, user_manager, created_user):
        """Test lookups use normalized keys."""
        by_name = await user_manager.find_by_name("ALICE")
        by_email = await user_manager.find_by_email("Alice@Contoso.COM")

        assert by_name.id == created_user.id
        assert by_email.id == created_user.id
        assert await user_manager.find_by_name("nobody") is None
        assert await user_manager.find_by_email("nobody@contoso.com") is None

    @pytest.mark.asyncio
    async def test_find_by_id_returns_copy(self, user_manager, created_user):
        """Test stored users change only through update."""
        found = await user_manager.find_by_id(created_user.id)
        found.phone_number = "555-0100"

        again = await user_manager.find_by_id(created_user.id)

        assert again.phone_number is None

    @pytest.mark.asyncio
    async def test_update_persists_and_rotates_stamp(self, user_manager, created_user):
        """Test update stores changes with a new concurrency stamp."""
        stamp = created_user.concurrency_stamp
        created_user.phone_number = "555-0100"

        result = await user_manager.update(created_user)

        assert result.succeeded
        assert created_user.concurrency_stamp != stamp
        stored = await user_manager.find_by_id(created_user.id)
        assert stored.phone_number == "555-0100"

    @pytest.mark.asyncio
    async def test_stale_update_is_concurrency_failure(self, user_manager, created_user):
        """Test the second of two updates from the same snapshot fails."""
        first = await user_manager.find_by_id(created_user.id)
        second = await user_manager.find_by_id(created_user.id)

        assert (await user_manager.update(first)).succeeded
        result = await user_manager.update(second)

        assert result.error_codes == (IdentityErrorCode.CONCURRENCY_FAILURE.value,)

    @pytest.mark.asyncio
    async def test_update_unknown_user_raises(self, user_manager):
        """Test acting on a user that was never stored."""
        with pytest.raises(UserNotFoundError):
            await user_manager.update(IdentityUser(user_name="ghost"))

    @pytest.mark.asyncio
    async def test_delete_removes_claims_and_roles(self, user_manager, created_user, created_role, services):
        """Test deleting a user also deletes its rows."""
        await user_manager.add_claim(created_user, Claim("department", "sales"))
        await user_manager.add_to_role(created_user, created_role)

        result = await user_manager.delete(created_user)

        assert result.succeeded
        assert await user_manager.find_by_id(created_user.id) is None
        assert await user_manager.user_claim_repository.find_by_user_id(created_user.id) == []
        assert await user_manager.user_role_repository.find_by_user_id(created_user.id) == []

    @pytest.mark.asyncio
    async def test_stale_delete_keeps_claims_and_roles(self, user_manager, created_user, created_role):
        """Test a delete from an outdated snapshot fails without touching child rows."""
        await user_manager.add_claim(created_user, Claim("department", "sales"))
        await user_manager.add_to_role(created_user, created_role)
        stale = await user_manager.find_by_id(created_user.id)
        current = await user_manager.find_by_id(created_user.id)
        current.phone_number = "555-0100"
        assert (await user_manager.update(current)).succeeded

        result = await user_manager.delete(stale)

        assert result.error_codes == (IdentityErrorCode.CONCURRENCY_FAILURE.value,)
        assert await user_manager.find_by_id(created_user.id) is not None
        assert await user_manager.get_claims(created_user) == [Claim("department", "sales")]
        assert await user_manager.is_in_role(created_user, created_role)

    @pytest.mark.asyncio
    async def test_delete_missing_user_is_concurrency_failure(self, user_manager):
        """Test deleting a user that was never stored."""
        result = await user_manager.delete(IdentityUser(user_name="ghost"))

        assert result.error_codes == (IdentityErrorCode.CONCURRENCY_FAILURE.value,)

    @pytest.mark.asyncio
    async def test_is_user_exist(self, user_manager, created_user):
        """Test existence checks by key."""
        assert await user_manager.is_user_exist(created_user)
        assert not await user_manager.is_user_exist(IdentityUser(user_name="ghost"))


class TestUserNames:
    """Test user name operations."""

    @pytest.mark.asyncio
    async def test_get_user_id_and_name(self, user_manager, created_user):
        """Test accessors on a stored user."""
        assert await user_manager.get_user_id(created_user) == created_user.id
        assert await user_manager.get_user_name(created_user) == "alice"

    @pytest.mark.asyncio
    async def test_set_user_name(self, user_manager, created_user):
        """Test renaming updates both name fields."""
        result = await user_manager.set_user_name(created_user, "alice2")

        assert result.succeeded
        stored = await user_manager.find_by_name("Alice2")
        assert stored.user_name == "alice2"
        assert stored.normalized_user_name == "ALICE2"

    @pytest.mark.asyncio
    async def test_set_user_name_validates_new_name(self, user_manager, created_user):
        """Test an invalid new name is rejected and nothing changes."""
        result = await user_manager.set_user_name(created_user, "not valid!")

        assert result.error_codes == (IdentityErrorCode.INVALID_USER_NAME.value,)
        assert created_user.user_name == "alice"
        assert (await user_manager.find_by_id(created_user.id)).user_name == "alice"

    def test_normalize_name(self, user_manager):
        """Test normalization and empty names."""
        assert user_manager.normalize_name("Alice") == "ALICE"
        with pytest.raises(ValueError):
            user_manager.normalize_name("")

    @pytest.mark.asyncio
    async def test_validate_user(self, user_manager):
        """Test the configured user validator is used."""
        result = await user_manager.validate_user(IdentityUser(user_name="bad name"))

        assert result.error_codes == (IdentityErrorCode.INVALID_USER_NAME.value,)


class TestUserPasswords:
    """Test the password lifecycle."""

    @pytest.mark.asyncio
    async def test_check_and_verify_password(self, user_manager, created_user):
        """Test correct and incorrect passwords."""
        assert await user_manager.check_password(created_user, PASSWORD)
        assert not await user_manager.check_password(created_user, "Wrong0ne!")
        assert not await user_manager.check_password(None, PASSWORD)
        assert await user_manager.verify_password(created_user, PASSWORD) is PasswordVerificationResult.SUCCESS

    @pytest.mark.asyncio
    async def test_add_password_when_one_exists_fails(self, user_manager, created_user):
        """Test a second password cannot be added."""
        result = await user_manager.add_password(created_user, "N3wPassword!")

        assert result.error_codes == (IdentityErrorCode.USER_ALREADY_HAS_PASSWORD.value,)

    @pytest.mark.asyncio
    async def test_remove_then_add_password(self, user_manager, created_user):
        """Test removing a password and adding a new one."""
        assert (await user_manager.remove_password(created_user)).succeeded
        assert not await user_manager.has_password(created_user)
        assert not await user_manager.check_password(created_user, PASSWORD)

        result = await user_manager.add_password(created_user, "N3wPassword!")

        assert result.succeeded
        assert await user_manager.has_password(created_user)
        assert await user_manager.check_password(created_user, "N3wPassword!")

    @pytest.mark.asyncio
    async def test_add_password_validates(self, user_manager, created_user):
        """Test added passwords must satisfy the policy."""
        await user_manager.remove_password(created_user)

        result = await user_manager.add_password(created_user, "weak")

        assert not result.succeeded
        assert not await user_manager.has_password(created_user)

    @pytest.mark.asyncio
    async def test_change_password(self, user_manager, created_user):
        """Test changing a password rotates the security stamp."""
        security_stamp = created_user.security_stamp

        result = await user_manager.change_password(created_user, PASSWORD, "N3wPassword!")

        assert result.succeeded
        assert created_user.security_stamp != security_stamp
        stored = await user_manager.find_by_id(created_user.id)
        assert await user_manager.check_password(stored, "N3wPassword!")
        assert not await user_manager.check_password(stored, PASSWORD)

    @pytest.mark.asyncio
    async def test_change_password_mismatch(self, user_manager, created_user):
        """Test a wrong current password."""
        result = await user_manager.change_password(created_user, "Wrong0ne!", "N3wPassword!")

        assert result.error_codes == (IdentityErrorCode.PASSWORD_MISMATCH.value,)

    @pytest.mark.asyncio
    async def test_change_password_validates_new_password(self, user_manager, created_user):
        """Test the new password must satisfy the policy."""
        result = await user_manager.change_password(created_user, PASSWORD, "password")

        assert result.error_codes == (IdentityErrorCode.PASSWORD_REQUIRES_DIGIT.value,)
        assert await user_manager.check_password(created_user, PASSWORD)

    @pytest.mark.asyncio
    async def test_reset_password(self, user_manager, created_user):
        """Test resetting without the current password."""
        result = await user_manager.reset_password(created_user, "R3setPassword!")

        assert result.succeeded
        assert await user_manager.check_password(created_user, "R3setPassword!")

    @pytest.mark.asyncio
    async def test_update_password_hash_without_validation(self, user_manager, created_user):
        """Test skipping validation stores a weak password."""
        result = await user_manager.update_password_hash(created_user, "weak", False)

        assert result.succeeded
        assert await user_manager.check_password(created_user, "weak")

    @pytest.mark.asyncio
    async def test_validate_password(self, user_manager, created_user):
        """Test the configured password validator is used."""
        result = await user_manager.validate_password(created_user, "Alexander32")

        assert result.error_codes == (IdentityErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC.value,)


class TestUserClaims:
    """Test user claims."""

    @pytest.mark.asyncio
    async def test_add_and_get_claims(self, user_manager, created_user):
        """Test claims round trip through the claim repository."""
        claims = [Claim("department", "sales"), Claim("level", "3")]

        result = await user_manager.add_claims(created_user, claims)

        assert result.succeeded
        assert await user_manager.get_claims(created_user) == claims

    @pytest.mark.asyncio
    async def test_duplicate_claim_is_stored_and_logged(self, user_manager, created_user, caplog):
        """Test a duplicate claim is not rejected but is logged."""
        claim = Claim("department", "sales")
        await user_manager.add_claim(created_user, claim)

        with caplog.at_level(logging.WARNING):
            result = await user_manager.add_claim(created_user, claim)

        assert result.succeeded
        assert len(await user_manager.get_claims(created_user)) == 2
        assert "already has claim" in caplog.text

    @pytest.mark.asyncio
    async def test_remove_claim(self, user_manager, created_user):
        """Test removing an existing claim."""
        await user_manager.add_claims(created_user, [Claim("department", "sales"), Claim("level", "3")])

        result = await user_manager.remove_claim(created_user, Claim("department", "sales"))

        assert result.succeeded
        assert await user_manager.get_claims(created_user) == [Claim("level", "3")]

    @pytest.mark.asyncio
    async def test_remove_repeated_claim_succeeds(self, user_manager, created_user):
        """Test a claim listed twice is removed once without a conflict."""
        claim = Claim("department", "sales")
        await user_manager.add_claims(created_user, [claim, Claim("level", "3")])

        result = await user_manager.remove_claims(created_user, [claim, Claim("department", "sales", issuer="hr")])

        assert result.succeeded
        assert await user_manager.get_claims(created_user) == [Claim("level", "3")]

    @pytest.mark.asyncio
    async def test_remove_missing_claim_succeeds(self, user_manager, created_user):
        """Test removing a claim the user does not have."""
        result = await user_manager.remove_claims(created_user, [Claim("department", "sales")])

        assert result.succeeded

    @pytest.mark.asyncio
    async def test_replace_claim(self, user_manager, created_user):
        """Test replacing a claim value."""
        await user_manager.add_claim(created_user, Claim("level", "3"))

        result = await user_manager.replace_claim(created_user, Claim("level", "3"), Claim("level", "4"))

        assert result.succeeded
        assert await user_manager.get_claims(created_user) == [Claim("level", "4")]

    @pytest.mark.asyncio
    async def test_get_users_for_claim(self, user_manager, created_user):
        """Test finding users by claim."""
        other = IdentityUser(user_name="bob")
        await user_manager.create(other, PASSWORD)
        await user_manager.add_claim(created_user, Claim("department", "sales"))
        await user_manager.add_claim(other, Claim("department", "support"))

        users = await user_manager.get_users_for_claim(Claim("department", "sales"))

        assert [u.id for u in users] == [created_user.id]

    @pytest.mark.asyncio
    async def test_claims_require_stored_user(self, user_manager):
        """Test claim operations on an unknown user."""
        with pytest.raises(UserNotFoundError):
            await user_manager.add_claim(IdentityUser(user_name="ghost"), Claim("a", "b"))


class TestUserRoles:
    """Test role membership."""

    @pytest.mark.asyncio
    async def test_add_to_role(self, user_manager, created_user, created_role):
        """Test adding a user to a role."""
        result = await user_manager.add_to_role(created_user, created_role)

        assert result.succeeded
        assert await user_manager.is_in_role(created_user, created_role)
        roles = await user_manager.get_roles(created_user)
        assert [r.name for r in roles] == ["Administrator"]

    @pytest.mark.asyncio
    async def test_add_to_role_twice_fails(self, user_manager, created_user, created_role):
        """Test a membership cannot be added twice."""
        await user_manager.add_to_role(created_user, created_role)

        result = await user_manager.add_to_role(created_user, created_role)

        assert result.error_codes == (IdentityErrorCode.USER_ALREADY_IN_ROLE.value,)
        assert "Administrator" in result.errors[0].description

    @pytest.mark.asyncio
    async def test_racing_membership_is_described_by_role_name(self, user_manager, created_user, created_role):
        """Test a duplicate reported by storage names the role rather than its key."""
        describer = user_manager.error_describer
        user_manager.user_role_repository.create = AsyncMock(
            return_value=IdentityResult.failed(describer.user_already_in_role(created_role.id))
        )

        result = await user_manager.add_to_role(created_user, created_role)

        assert result.error_codes == (IdentityErrorCode.USER_ALREADY_IN_ROLE.value,)
        assert result.errors[0] == describer.user_already_in_role("Administrator")

    @pytest.mark.asyncio
    async def test_add_to_missing_role_raises(self, user_manager, created_user):
        """Test a role that was never stored."""
        with pytest.raises(RoleNotFoundError):
            await user_manager.add_to_role(created_user, IdentityRole(name="Ghosts"))

    @pytest.mark.asyncio
    async def test_add_to_roles(self, user_manager, role_manager, created_user, created_role):
        """Test adding a user to several roles."""
        editors = IdentityRole(name="Editors")
        await role_manager.create(editors)

        result = await user_manager.add_to_roles(created_user, [created_role, editors])

        assert result.succeeded
        assert {r.name for r in await user_manager.get_roles(created_user)} == {"Administrator", "Editors"}

    @pytest.mark.asyncio
    async def test_remove_from_role(self, user_manager, created_user, created_role):
        """Test removing a membership."""
        await user_manager.add_to_role(created_user, created_role)

        result = await user_manager.remove_from_role(created_user, created_role)

        assert result.succeeded
        assert not await user_manager.is_in_role(created_user, created_role)

    @pytest.mark.asyncio
    async def test_remove_missing_membership_succeeds(self, user_manager, created_user, created_role):
        """Test removing a role the user is not in is a no-op."""
        result = await user_manager.remove_from_role(created_user, created_role)

        assert result.succeeded
        assert not await user_manager.is_in_role(created_user, created_role)

    @pytest.mark.asyncio
    async def test_remove_from_roles_skips_non_memberships(self, user_manager, role_manager, created_user, created_role):
        """Test roles the user is not in do not stop later removals."""
        editors = IdentityRole(name="Editors")
        await role_manager.create(editors)
        await user_manager.add_to_role(created_user, editors)

        result = await user_manager.remove_from_roles(created_user, [created_role, editors])

        assert result.succeeded
        assert await user_manager.get_roles(created_user) == []

    @pytest.mark.asyncio
    async def test_get_users_in_role(self, user_manager, created_user, created_role):
        """Test listing the members of a role."""
        other = IdentityUser(user_name="bob")
        await user_manager.create(other, PASSWORD)
        await user_manager.add_to_role(created_user, created_role)

        users = await user_manager.get_users_in_role(created_role)

        assert [u.id for u in users] == [created_user.id]

    @pytest.mark.asyncio
    async def test_get_roles_skips_deleted_roles(self, user_manager, role_manager, created_user, created_role):
        """Test memberships pointing at a vanished role are ignored."""
        await user_manager.add_to_role(created_user, created_role)
        await role_manager.role_repository.delete(created_role)

        assert await user_manager.get_roles(created_user) == []


class TestUserManagerDisposal:
    """Test disposal."""

    @pytest.mark.asyncio
    async def test_disposed_manager_raises(self, user_manager, created_user):
        """Test a disposed manager and its repositories reject calls."""
        user_manager.dispose()

        assert user_manager.disposed
        assert user_manager.user_repository.disposed
        with pytest.raises(ObjectDisposedError):
            await user_manager.find_by_id(created_user.id)

    @pytest.mark.asyncio
    async def test_async_context_manager_disposes(self, user_manager):
        """Test async with disposes on exit."""
        async with user_manager as manager:
            assert manager is user_manager

        assert user_manager.disposed
        assert user_manager.role_manager.disposed

"""Tests for password sign-in."""

from datetime import timedelta

import pytest

from neo_identity.config.constants import SignInResult
from neo_identity.features.auth.entities import IdentityContext

VALID_PASSWORD = "Passw0rd!"


class TestPasswordSignIn:
    """Test password_sign_in outcomes."""

    @pytest.mark.asyncio
    async def test_successful_sign_in(self, sign_in_manager, created_user, fake_clock):
        """Test a correct password installs the principal on the context."""
        context = IdentityContext()

        result = await sign_in_manager.password_sign_in(context, "alice", VALID_PASSWORD)

        assert result is SignInResult.SUCCEEDED
        assert result.succeeded
        assert context.is_authenticated
        assert context.user_name == "alice"
        assert context.signed_in_at == fake_clock()
        assert sign_in_manager.is_signed_in(context)

    @pytest.mark.asyncio
    async def test_user_name_is_case_insensitive(self, sign_in_manager, created_user):
        """Test sign-in looks users up by normalized name."""
        result = await sign_in_manager.password_sign_in(IdentityContext(), "ALICE", VALID_PASSWORD)

        assert result is SignInResult.SUCCEEDED

    @pytest.mark.asyncio
    async def test_unknown_user(self, sign_in_manager):
        """Test an unknown user name is an invalid credential."""
        context = IdentityContext()

        result = await sign_in_manager.password_sign_in(context, "nobody", VALID_PASSWORD)

        assert result is SignInResult.INVALID_CREDENTIAL
        assert not context.is_authenticated

    @pytest.mark.asyncio
    async def test_wrong_password(self, sign_in_manager, created_user):
        """Test a wrong password is an invalid credential."""
        context = IdentityContext()

        result = await sign_in_manager.password_sign_in(context, "alice", "Wr0ng!pass")

        assert result is SignInResult.INVALID_CREDENTIAL
        assert not context.is_authenticated

    @pytest.mark.asyncio
    async def test_wrong_password_is_not_counted(self, sign_in_manager, user_manager, created_user):
        """Test failed sign-ins leave the failure counter to the caller."""
        await sign_in_manager.password_sign_in(IdentityContext(), "alice", "Wr0ng!pass")

        assert await user_manager.get_access_failed_count(created_user) == 0

    @pytest.mark.asyncio
    async def test_locked_out_user(self, sign_in_manager, user_manager, created_user, fake_clock):
        """Test a locked out user cannot sign in even with the right password."""
        await user_manager.set_lockout_end_date(created_user, fake_clock() + timedelta(minutes=5))
        context = IdentityContext()

        result = await sign_in_manager.password_sign_in(context, "alice", VALID_PASSWORD)

        assert result is SignInResult.LOCKED_OUT
        assert not context.is_authenticated

    @pytest.mark.asyncio
    async def test_wrong_password_while_locked_out(self, sign_in_manager, user_manager, created_user, fake_clock):
        """Test the password is checked before lockout."""
        await user_manager.set_lockout_end_date(created_user, fake_clock() + timedelta(minutes=5))

        result = await sign_in_manager.password_sign_in(IdentityContext(), "alice", "Wr0ng!pass")

        assert result is SignInResult.INVALID_CREDENTIAL

    @pytest.mark.asyncio
    async def test_lockout_after_repeated_failures(self, sign_in_manager, user_manager, created_user):
        """Test a host counting failures ends up with a locked out user."""
        for _ in range(5):
            result = await sign_in_manager.password_sign_in(IdentityContext(), "alice", "Wr0ng!pass")
            assert result is SignInResult.INVALID_CREDENTIAL
            await user_manager.access_failed(created_user)

        result = await sign_in_manager.password_sign_in(IdentityContext(), "alice", VALID_PASSWORD)

        assert result is SignInResult.LOCKED_OUT

    @pytest.mark.asyncio
    async def test_user_without_password(self, sign_in_manager, user_manager, created_user):
        """Test a user whose password was removed cannot sign in."""
        await user_manager.remove_password(created_user)

        result = await sign_in_manager.password_sign_in(IdentityContext(), "alice", VALID_PASSWORD)

        assert result is SignInResult.INVALID_CREDENTIAL

    @pytest.mark.asyncio
    async def test_invalid_arguments_raise(self, sign_in_manager):
        """Test missing arguments are precondition violations."""
        with pytest.raises(ValueError):
            await sign_in_manager.password_sign_in(None, "alice", VALID_PASSWORD)
        with pytest.raises(ValueError):
            await sign_in_manager.password_sign_in(IdentityContext(), "", VALID_PASSWORD)
        with pytest.raises(ValueError):
            await sign_in_manager.password_sign_in(IdentityContext(), "alice", None)

    def test_not_allowed_is_reserved(self):
        """Test NOT_ALLOWED exists but is not a success."""
        assert not SignInResult.NOT_ALLOWED.succeeded


class TestSignOut:
    """Test sign_out and is_signed_in."""

    @pytest.mark.asyncio
    async def test_sign_out_clears_principal(self, sign_in_manager, created_user):
        """Test signing out leaves an anonymous principal."""
        context = IdentityContext()
        await sign_in_manager.password_sign_in(context, "alice", VALID_PASSWORD)

        await sign_in_manager.sign_out(context)

        assert not sign_in_manager.is_signed_in(context)
        assert context.user_name is None
        assert context.signed_in_at is None

    @pytest.mark.asyncio
    async def test_contexts_are_independent(self, sign_in_manager, created_user):
        """Test signing in on one context does not affect another."""
        signed_in = IdentityContext()
        other = IdentityContext()

        await sign_in_manager.password_sign_in(signed_in, "alice", VALID_PASSWORD)

        assert sign_in_manager.is_signed_in(signed_in)
        assert not sign_in_manager.is_signed_in(other)
        assert signed_in.request_id != other.request_id

    @pytest.mark.asyncio
    async def test_none_context_raises(self, sign_in_manager):
        """Test None contexts are rejected."""
        with pytest.raises(ValueError):
            await sign_in_manager.sign_out(None)
        with pytest.raises(ValueError):
            sign_in_manager.is_signed_in(None)

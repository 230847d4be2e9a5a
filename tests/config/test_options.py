"""Tests for identity options and environment settings."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from neo_identity.config.constants import ClaimTypes, PolicyDefaults
from neo_identity.config.options import IdentityOptions, LockoutOptions, PasswordOptions
from neo_identity.config.settings import IdentitySettings, get_identity_settings


class TestIdentityOptions:
    """Test option defaults and validation."""

    def test_defaults(self):
        """Test the documented policy defaults."""
        options = IdentityOptions()

        assert options.password.required_length == 6
        assert options.password.require_non_alphanumeric
        assert options.lockout.max_failed_access_attempts == 5
        assert options.lockout.default_lockout_time_span == timedelta(seconds=30)
        assert options.lockout.allowed_for_new_users
        assert not options.user.require_unique_email
        assert options.role.required_role_name_length == 6
        assert options.application_identity.role_claim_type == ClaimTypes.ROLE
        assert options.repository.schema_name == "identity"
        assert options.repository.max_length_for_keys == 0

    def test_groups_are_independent(self):
        """Test each options object gets its own groups."""
        first = IdentityOptions()
        second = IdentityOptions()

        first.password.required_length = 12

        assert second.password.required_length == PolicyDefaults.PASSWORD_REQUIRED_LENGTH

    def test_assignment_is_validated(self):
        """Test invalid values are rejected on assignment."""
        options = LockoutOptions()

        with pytest.raises(ValidationError):
            options.max_failed_access_attempts = 0

    def test_negative_length_rejected(self):
        """Test negative lengths are rejected."""
        with pytest.raises(ValidationError):
            PasswordOptions(required_length=-1)


class TestIdentitySettings:
    """Test settings loaded from the environment."""

    @pytest.fixture(autouse=True)
    def clear_settings_cache(self):
        get_identity_settings.cache_clear()
        yield
        get_identity_settings.cache_clear()

    def test_nested_environment_variables(self, monkeypatch):
        """Test IDENTITY_ variables with __ reach nested groups."""
        monkeypatch.setenv("IDENTITY_PASSWORD__REQUIRED_LENGTH", "12")
        monkeypatch.setenv("IDENTITY_LOCKOUT__MAX_FAILED_ACCESS_ATTEMPTS", "3")
        monkeypatch.setenv("IDENTITY_REPOSITORY__SCHEMA_NAME", "auth")
        monkeypatch.setenv("IDENTITY_BCRYPT_ROUNDS", "6")

        settings = get_identity_settings()

        assert settings.password.required_length == 12
        assert settings.lockout.max_failed_access_attempts == 3
        assert settings.repository.schema_name == "auth"
        assert settings.bcrypt_rounds == 6

    def test_settings_are_cached(self):
        """Test the settings accessor returns one instance."""
        assert get_identity_settings() is get_identity_settings()

    def test_to_options_copies_groups(self):
        """Test options built from settings do not share state with them."""
        settings = IdentitySettings()

        options = settings.to_options()
        options.password.required_length = 20

        assert settings.password.required_length == PolicyDefaults.PASSWORD_REQUIRED_LENGTH

    def test_bcrypt_rounds_bounds(self):
        """Test the bcrypt cost must be usable."""
        with pytest.raises(ValidationError):
            IdentitySettings(bcrypt_rounds=3)

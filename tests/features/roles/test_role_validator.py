"""Tests for role validation."""

import string

import pytest

from neo_identity.config.constants import IdentityErrorCode
from neo_identity.config.options import RoleOptions
from neo_identity.features.roles.entities import IdentityRole
from neo_identity.features.roles.services import RoleValidator


class TestRoleValidator:
    """Test role name rules."""

    @pytest.fixture
    def validator(self):
        return RoleValidator(
            RoleOptions(allowed_role_name_characters=string.ascii_letters, required_role_name_length=6)
        )

    @pytest.mark.asyncio
    async def test_valid_name_succeeds(self, validator):
        """Test a long enough letters-only name."""
        result = await validator.validate(IdentityRole(name="Administrator"))

        assert result.succeeded

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["admin", "admin!", "admin1", None])
    async def test_invalid_name_fails(self, validator, name):
        """Test short names and names with disallowed characters."""
        result = await validator.validate(IdentityRole(name=name))

        assert result.error_codes == (IdentityErrorCode.INVALID_ROLE_NAME.value,)

    @pytest.mark.asyncio
    async def test_default_options_allow_spaces(self):
        """Test the default character set accepts spaces."""
        result = await RoleValidator().validate(IdentityRole(name="Site Admin"))

        assert result.succeeded

    @pytest.mark.asyncio
    async def test_none_role_raises(self, validator):
        """Test None is a precondition violation."""
        with pytest.raises(ValueError):
            await validator.validate(None)

"""Tests for the password policy validator."""

import pytest

from neo_identity.config.constants import IdentityErrorCode
from neo_identity.config.options import PasswordOptions
from neo_identity.features.passwords.services import PasswordValidator


class TestPasswordValidator:
    """Test password policy rules."""

    @pytest.fixture
    def validator(self):
        return PasswordValidator(PasswordOptions(required_length=8))

    def test_strong_password_succeeds(self, validator):
        """Test a password satisfying every rule."""
        result = validator.validate("D0nt4get!")

        assert result.succeeded
        assert result.errors == ()

    def test_all_alphanumeric_password_fails(self, validator):
        """Test a password without a symbol."""
        result = validator.validate("Alexander32")

        assert not result.succeeded
        assert result.error_codes == (IdentityErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC.value,)

    def test_short_password_fails(self, validator):
        """Test a password below the required length."""
        result = validator.validate("Alex2!")

        assert not result.succeeded
        assert result.error_codes == (IdentityErrorCode.PASSWORD_TOO_SHORT.value,)
        assert "8" in result.errors[0].description

    @pytest.mark.parametrize(
        "password, expected",
        [
            ("Password!", IdentityErrorCode.PASSWORD_REQUIRES_DIGIT),
            ("PASSW0RD!", IdentityErrorCode.PASSWORD_REQUIRES_LOWER),
            ("passw0rd!", IdentityErrorCode.PASSWORD_REQUIRES_UPPER),
        ],
    )
    def test_missing_character_class_fails(self, validator, password, expected):
        """Test each character class rule."""
        result = validator.validate(password)

        assert result.error_codes == (expected.value,)

    def test_first_failing_rule_wins(self, validator):
        """Test the digit rule is reported before the length rule."""
        result = validator.validate("abc")

        assert result.error_codes == (IdentityErrorCode.PASSWORD_REQUIRES_DIGIT.value,)

    def test_empty_password_goes_through_rules(self):
        """Test an empty password fails on the first enabled rule."""
        assert PasswordValidator().validate("").error_codes == (
            IdentityErrorCode.PASSWORD_REQUIRES_DIGIT.value,
        )

        relaxed = PasswordValidator(PasswordOptions(require_digit=False))
        assert relaxed.validate("").error_codes == (IdentityErrorCode.PASSWORD_TOO_SHORT.value,)

    def test_unique_characters_rule(self):
        """Test the distinct character count rule."""
        validator = PasswordValidator(PasswordOptions(required_unique_chars=5))

        result = validator.validate("Aa1!Aa1!")

        assert result.error_codes == (IdentityErrorCode.PASSWORD_REQUIRES_UNIQUE_CHARS.value,)
        assert validator.validate("Ab1!cD2?").succeeded

    def test_relaxed_policy(self):
        """Test disabling every character class rule."""
        options = PasswordOptions(
            require_digit=False,
            require_lowercase=False,
            require_uppercase=False,
            require_non_alphanumeric=False,
            required_length=4,
        )

        assert PasswordValidator(options).validate("aaaa").succeeded

    def test_none_password_raises(self, validator):
        """Test None is a precondition violation."""
        with pytest.raises(ValueError):
            validator.validate(None)

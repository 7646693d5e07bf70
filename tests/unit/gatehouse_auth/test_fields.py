"""Unit tests for the account field validators."""

from itertools import permutations

import pytest

from gatehouse_auth.exceptions import FieldValidationError
from gatehouse_auth.validation import validate_email, validate_name, validate_password
from gatehouse_auth.validation.fields import (
    EMAIL_FORMAT_MESSAGE,
    EMAIL_LENGTH_MESSAGE,
    INVALID_TEXT_MESSAGE,
    NAME_LENGTH_MESSAGE,
    PASSWORD_LENGTH_MESSAGE,
    PASSWORD_SPECIAL_CHARACTERS,
    PASSWORD_STRENGTH_MESSAGE,
)


class TestValidateEmail:
    """Tests for email validation."""

    @pytest.mark.parametrize(
        "email",
        ["your@email.com", "a.b-c+tag@sub.domain.io", "x_y%z@d.co"],
    )
    def test_accepts_valid_addresses(self, email):
        """Valid addresses are returned unchanged."""
        assert validate_email(email) == email

    def test_rejects_too_short(self):
        """Two bytes is below the minimum length."""
        with pytest.raises(FieldValidationError) as exc_info:
            validate_email("ab")
        assert exc_info.value.message == EMAIL_LENGTH_MESSAGE

    def test_rejects_too_long(self):
        """256 bytes is above the maximum length."""
        email = "a" * 246 + "@email.com"
        assert len(email) == 256

        with pytest.raises(FieldValidationError) as exc_info:
            validate_email(email)
        assert exc_info.value.message == EMAIL_LENGTH_MESSAGE

    @pytest.mark.parametrize("email", ["a", "a" * 256 + "@email.com"])
    def test_rejects_out_of_range_literals(self, email):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_email(email)
        assert exc_info.value.message == EMAIL_LENGTH_MESSAGE

    def test_accepts_maximum_length(self):
        """Exactly 255 bytes is accepted."""
        email = "a" * 245 + "@email.com"
        assert validate_email(email) == email

    def test_length_is_checked_before_format(self):
        """A short, malformed address reports the length message only."""
        with pytest.raises(FieldValidationError, match="between 3 and 255"):
            validate_email("@")

    @pytest.mark.parametrize(
        "email",
        [
            "plainaddress",
            "missing-at.com",
            "no@tld",
            "two@@signs.com",
            "user@domain.c",
            "spaces in@email.com",
            "user@email.com trailing",
            "üser@email.com",
        ],
    )
    def test_rejects_bad_format(self, email):
        """Anything not shaped like local@domain.tld is rejected."""
        with pytest.raises(FieldValidationError) as exc_info:
            validate_email(email)
        assert exc_info.value.message == EMAIL_FORMAT_MESSAGE

    def test_rejects_trailing_newline(self):
        """The whole string must match, a trailing newline included."""
        with pytest.raises(FieldValidationError, match=EMAIL_FORMAT_MESSAGE):
            validate_email("your@email.com\n")


class TestValidatePassword:
    """Tests for password strength validation."""

    def test_accepts_strong_password(self):
        assert validate_password("stR0ngP4ssw0rd!") == "stR0ngP4ssw0rd!"

    def test_rejects_short_password_with_length_message(self):
        """Seven bytes fail on length, not on character classes."""
        with pytest.raises(FieldValidationError) as exc_info:
            validate_password("Ab1!xyz")
        assert exc_info.value.message == PASSWORD_LENGTH_MESSAGE

    def test_accepts_minimum_length(self):
        assert validate_password("Ab1!xyzw") == "Ab1!xyzw"

    def test_accepts_maximum_length(self):
        password = "Ab1!" + "x" * 68
        assert len(password.encode()) == 72
        assert validate_password(password) == password

    def test_rejects_73_bytes(self):
        password = "Ab1!" + "x" * 69
        with pytest.raises(FieldValidationError, match=PASSWORD_LENGTH_MESSAGE):
            validate_password(password)

    def test_length_counts_bytes_not_characters(self):
        """Multi-byte characters count by their UTF-8 size."""
        password = "Ab1!" + "é" * 35  # 4 + 70 bytes, 39 characters
        assert len(password) < 72

        with pytest.raises(FieldValidationError, match=PASSWORD_LENGTH_MESSAGE):
            validate_password(password)

    def test_weak_password_reports_only_length(self):
        """A short password missing classes yields only the length error."""
        with pytest.raises(FieldValidationError) as exc_info:
            validate_password("abc")
        assert exc_info.value.message == PASSWORD_LENGTH_MESSAGE

    @pytest.mark.parametrize(
        ("password", "missing"),
        [
            ("str0ngp4ssw0rd!", "uppercase"),
            ("STR0NGP4SSW0RD!", "lowercase"),
            ("stRongPassword!", "digit"),
            ("stR0ngP4ssw0rd", "special"),
        ],
    )
    def test_rejects_missing_character_class(self, password, missing):
        """Each of the four classes is required."""
        with pytest.raises(FieldValidationError) as exc_info:
            validate_password(password)
        assert exc_info.value.message == PASSWORD_STRENGTH_MESSAGE

    @pytest.mark.parametrize("ordering", list(permutations(["A", "a", "1", "!"])))
    def test_class_order_does_not_matter(self, ordering):
        """Every arrangement of the four classes is accepted."""
        password = "".join(ordering) + "xxxx"
        assert validate_password(password) == password

    @pytest.mark.parametrize("special", list(PASSWORD_SPECIAL_CHARACTERS))
    def test_each_special_character_counts(self, special):
        password = f"Passw0rd{special}"
        assert validate_password(password) == password

    def test_other_punctuation_is_not_special(self):
        """Characters outside the special set do not satisfy the class."""
        with pytest.raises(FieldValidationError, match=PASSWORD_STRENGTH_MESSAGE):
            validate_password("Passw0rd_(~)")


class TestValidateName:
    """Tests for display name validation."""

    def test_rejects_two_characters(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_name("ab")
        assert exc_info.value.message == NAME_LENGTH_MESSAGE

    def test_accepts_three_characters(self):
        assert validate_name("abc") == "abc"

    def test_has_no_upper_bound(self):
        name = "n" * 10_000
        assert validate_name(name) == name

    def test_counts_bytes(self):
        """Two two-byte characters make four bytes, which is enough."""
        assert validate_name("éé") == "éé"


class TestUnencodableText:
    @pytest.mark.parametrize(
        "validator",
        [validate_email, validate_password, validate_name],
    )
    def test_rejects_lone_surrogates(self, validator):
        """Text without a UTF-8 form fails with a field message."""
        with pytest.raises(FieldValidationError) as exc_info:
            validator("Ab1!\ud800xyz@email.com")
        assert exc_info.value.message == INVALID_TEXT_MESSAGE

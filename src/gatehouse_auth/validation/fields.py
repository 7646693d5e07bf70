"""Field validators for account input.

Pure functions: each returns the value unchanged when it is acceptable and
raises ``FieldValidationError`` with a caller-safe message otherwise. Only
the failures of a single field are reported; collecting failures across
fields is left to the caller (see ``gatehouse_auth.validation.aggregation``).

Lengths are counted in UTF-8 bytes.
"""

import re

from gatehouse_auth.exceptions import FieldValidationError

EMAIL_MIN_LENGTH = 3
EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72
NAME_MIN_LENGTH = 3

PASSWORD_SPECIAL_CHARACTERS = "#?!@$%^&*-"

# user@domain.tld, ASCII only
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# One of each class, in any order
STRONG_PASSWORD_PATTERN = re.compile(
    r"^(?=.*[A-Z])(?=.*[a-z])(?=.*[0-9])(?=.*[#?!@$%^&*-])",
    re.DOTALL,
)

EMAIL_LENGTH_MESSAGE = (
    f"Email must contain between {EMAIL_MIN_LENGTH} and {EMAIL_MAX_LENGTH} characters"
)
EMAIL_FORMAT_MESSAGE = "Invalid email format"
PASSWORD_LENGTH_MESSAGE = (
    f"Password must contain between {PASSWORD_MIN_LENGTH} and "
    f"{PASSWORD_MAX_LENGTH} characters"
)
PASSWORD_STRENGTH_MESSAGE = (
    "Password must contain at least one uppercase letter, one lowercase letter, "
    "one digit and one special character"
)
NAME_LENGTH_MESSAGE = f"Name must have at least {NAME_MIN_LENGTH} characters"
INVALID_TEXT_MESSAGE = "Must be valid Unicode text"


def _byte_length(value: str) -> int:
    try:
        return len(value.encode("utf-8"))
    except UnicodeEncodeError as e:
        # Lone surrogates
        raise FieldValidationError(INVALID_TEXT_MESSAGE) from e


def validate_email(email: str) -> str:
    """Validate an email address.

    Raises
    ------
    FieldValidationError
        If the length is outside [3, 255] or the format is not
        ``local@domain.tld``
    """
    if not EMAIL_MIN_LENGTH <= _byte_length(email) <= EMAIL_MAX_LENGTH:
        raise FieldValidationError(EMAIL_LENGTH_MESSAGE)

    if not EMAIL_PATTERN.fullmatch(email):
        raise FieldValidationError(EMAIL_FORMAT_MESSAGE)

    return email


def validate_password(password: str) -> str:
    """Validate password strength.

    The length check runs first and short-circuits the character class
    check.

    Raises
    ------
    FieldValidationError
        If the length is outside [8, 72] or one of the four required
        character classes is missing
    """
    if not PASSWORD_MIN_LENGTH <= _byte_length(password) <= PASSWORD_MAX_LENGTH:
        raise FieldValidationError(PASSWORD_LENGTH_MESSAGE)

    if not STRONG_PASSWORD_PATTERN.match(password):
        raise FieldValidationError(PASSWORD_STRENGTH_MESSAGE)

    return password


def validate_name(name: str) -> str:
    """Validate a display name.

    Only a lower bound is enforced.
    """
    if _byte_length(name) < NAME_MIN_LENGTH:
        raise FieldValidationError(NAME_LENGTH_MESSAGE)

    return name

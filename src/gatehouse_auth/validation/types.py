"""Pydantic field types bound to the account field validators.

Failures are raised as ``PydanticCustomError`` so pydantic reports the
validator's message verbatim and keeps collecting errors on other fields.
"""

from collections.abc import Callable
from typing import Annotated

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

from gatehouse_auth.exceptions import FieldValidationError
from gatehouse_auth.validation.fields import (
    validate_email,
    validate_name,
    validate_password,
)

FIELD_RULE_ERROR = "field_rule"


def field_rule(validator: Callable[[str], str]) -> AfterValidator:
    """Wrap a field validator for use in an ``Annotated`` pydantic type."""

    def check(value: str) -> str:
        try:
            return validator(value)
        except FieldValidationError as e:
            raise PydanticCustomError(FIELD_RULE_ERROR, e.message) from e

    return AfterValidator(check)


Name = Annotated[str, field_rule(validate_name)]
EmailAddress = Annotated[str, field_rule(validate_email)]
StrongPassword = Annotated[str, field_rule(validate_password)]

"""Input validation: field rules, pydantic types and error aggregation."""

from gatehouse_auth.validation.aggregation import (
    flatten_errors,
    from_validation_errors,
)
from gatehouse_auth.validation.fields import (
    validate_email,
    validate_name,
    validate_password,
)
from gatehouse_auth.validation.types import (
    EmailAddress,
    Name,
    StrongPassword,
    field_rule,
)

__all__ = [
    "EmailAddress",
    "Name",
    "StrongPassword",
    "field_rule",
    "flatten_errors",
    "from_validation_errors",
    "validate_email",
    "validate_name",
    "validate_password",
]

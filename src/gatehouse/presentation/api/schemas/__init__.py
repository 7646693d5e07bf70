"""API request/response schemas."""

from gatehouse.presentation.api.schemas.accounts import (
    AccessTokenResponse,
    AccountResponse,
    ClaimsResponse,
    CreateAccountRequest,
    CredentialsRequest,
    ErrorResponse,
)

__all__ = [
    "AccessTokenResponse",
    "AccountResponse",
    "ClaimsResponse",
    "CreateAccountRequest",
    "CredentialsRequest",
    "ErrorResponse",
]

"""Gatehouse Auth - Generic authentication infrastructure.

This package provides authentication building blocks that are independent
of how accounts are stored or served. It handles:
- Field validation (email, password strength, name)
- Password hashing (Argon2id)
- Access token creation and verification (RS256 JWT)
- The error taxonomy and validation error aggregation

Architecture:
    gatehouse_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── validation/         # Field rules, pydantic types, aggregation
    ├── errors.py           # Error taxonomy (AppError + factories)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from gatehouse_auth import JWTService, KeyPair, PasswordHashingService

    jwt_service = JWTService(KeyPair.from_files("private.pem", "public.pem"))
"""

from gatehouse_auth.errors import (
    AppError,
    ErrorKind,
    bad_request,
    conflict,
    internal_error,
    service_unavailable,
    unauthorized,
    validation_failed,
)
from gatehouse_auth.exceptions import (
    CorruptedHashError,
    FieldValidationError,
    InvalidCredentialsError,
    InvalidTokenError,
    KeyMaterialError,
)
from gatehouse_auth.schemas import AccessToken, Claims
from gatehouse_auth.services import JWTService, KeyPair, PasswordHashingService

__all__ = [
    # Services
    "JWTService",
    "KeyPair",
    "PasswordHashingService",
    # Schemas
    "AccessToken",
    "Claims",
    # Error taxonomy
    "AppError",
    "ErrorKind",
    "bad_request",
    "conflict",
    "internal_error",
    "service_unavailable",
    "unauthorized",
    "validation_failed",
    # Exceptions
    "CorruptedHashError",
    "FieldValidationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "KeyMaterialError",
]

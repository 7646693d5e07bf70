"""Authentication services.

Provides password hashing and JWT token management.
"""

from gatehouse_auth.services.jwt_service import JWTService, KeyPair
from gatehouse_auth.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "KeyPair",
    "PasswordHashingService",
]

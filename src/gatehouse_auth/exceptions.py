"""Authentication exceptions.

These exceptions are raised by the gatehouse_auth package. The ones that
can reach a caller are ``AppError`` subclasses, so they already carry their
taxonomy kind and a non-leaking message. ``KeyMaterialError`` is a startup
failure and is never turned into a response.
"""

from gatehouse_auth.errors import (
    INTERNAL_ERROR_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    AppError,
    ErrorKind,
)


class InvalidCredentialsError(AppError):
    """Raised when email or password is incorrect during signin."""

    def __init__(self, trace: str | None = None):
        super().__init__(ErrorKind.UNAUTHORIZED, UNAUTHORIZED_MESSAGE, trace)


class InvalidTokenError(AppError):
    """Raised when a token is expired, malformed or signed by another key."""

    def __init__(self, trace: str | None = None):
        super().__init__(ErrorKind.UNAUTHORIZED, UNAUTHORIZED_MESSAGE, trace)


class CorruptedHashError(AppError):
    """Raised when a stored password hash cannot be parsed."""

    def __init__(self, trace: str | None = None):
        super().__init__(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE, trace)


class KeyMaterialError(Exception):
    """Raised when the signing key pair cannot be read or parsed."""

    def __init__(self, message: str = "Invalid key material"):
        self.message = message
        super().__init__(self.message)


class FieldValidationError(ValueError):
    """Raised by a field validator. ``message`` is safe to show the caller."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

"""Password hashing service using Argon2id.

Provides salted, memory-hard password hashing and verification. The
encoded hash embeds the algorithm, its parameters and the salt, so
verification needs nothing but the stored string.
"""

import contextlib
import logging
import secrets
from functools import cached_property

from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from gatehouse_auth.errors import internal_error
from gatehouse_auth.exceptions import CorruptedHashError, InvalidCredentialsError

logger = logging.getLogger(__name__)


def _is_encodable(password: str) -> bool:
    try:
        password.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Hashing and verification are CPU and memory heavy and synchronous.
    Callers running on an event loop should offload them to a worker
    thread.

    Examples
    --------
    >>> service = PasswordHashingService()
    >>> encoded = service.hash("stR0ngP4ssw0rd!")
    >>> service.verify("stR0ngP4ssw0rd!", encoded)  # returns None
    >>> service.verify("wrong", encoded)  # raises InvalidCredentialsError
    """

    def __init__(self, hasher: PasswordHasher | None = None):
        """Initialize the password hashing service.

        Parameters
        ----------
        hasher
            A configured argon2 ``PasswordHasher``. Defaults to argon2-cffi's
            recommended Argon2id parameters. Tests pass a cheap one.
        """
        self._hasher = hasher or PasswordHasher()

    def hash(self, password: str) -> str:
        """Hash a plaintext password with a fresh random salt.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The PHC-encoded Argon2id hash

        Raises
        ------
        AppError
            InternalError if argon2 cannot hash the input
        """
        try:
            return self._hasher.hash(password)
        except (HashingError, UnicodeEncodeError) as e:
            logger.error("Failed to hash password: %s", type(e).__name__)
            raise internal_error().with_trace(type(e).__name__) from e

    def verify(self, password: str, password_hash: str) -> None:
        """Verify a password against an encoded hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The encoded hash to verify against

        Raises
        ------
        InvalidCredentialsError
            If the password does not match
        CorruptedHashError
            If the stored hash is malformed or unsupported
        """
        if not _is_encodable(password):
            # Cannot match any stored hash
            raise InvalidCredentialsError(trace="password is not valid UTF-8")

        try:
            self._hasher.verify(password_hash, password)
        except VerifyMismatchError as e:
            raise InvalidCredentialsError from e
        except (InvalidHashError, VerificationError, ValueError) as e:
            raise CorruptedHashError(trace=f"{type(e).__name__}: {e}") from e

    def verify_dummy(self, password: str) -> None:
        """Run a full verification that can never succeed.

        Used when no account matches or its stored hash is unusable, so
        those paths cost as much as a wrong password. Input that ``verify``
        rejects up front is rejected here too. Never raises.
        """
        if not _is_encodable(password):
            return

        with contextlib.suppress(VerificationError, InvalidHashError, ValueError):
            self._hasher.verify(self._dummy_hash, password)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a hash was produced with outdated parameters.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            return self._hasher.check_needs_rehash(password_hash)
        except (InvalidHashError, ValueError):
            return True

    @cached_property
    def _dummy_hash(self) -> str:
        return self._hasher.hash(secrets.token_urlsafe(32))

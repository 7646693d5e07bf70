"""JWT token service.

Provides RS256 access token creation and verification. The private key
signs, the public key verifies. Both are parsed once at startup and held
read-only for the life of the process.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from gatehouse_auth.errors import internal_error
from gatehouse_auth.exceptions import InvalidTokenError, KeyMaterialError
from gatehouse_auth.schemas import AccessToken, Claims

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyPair:
    """RSA key pair used to sign and verify access tokens."""

    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey

    @classmethod
    def from_rsa_pem(cls, private_key: bytes, public_key: bytes) -> "KeyPair":
        """Parse a PEM-encoded RSA key pair.

        Parameters
        ----------
        private_key
            PEM private key (PKCS#1 or PKCS#8, unencrypted)
        public_key
            PEM public key (SubjectPublicKeyInfo)

        Raises
        ------
        KeyMaterialError
            If either key cannot be parsed or is not an RSA key
        """
        try:
            private = serialization.load_pem_private_key(private_key, password=None)
            public = serialization.load_pem_public_key(public_key)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            msg = f"Cannot parse RSA key material: {e}"
            raise KeyMaterialError(msg) from e

        if not isinstance(private, rsa.RSAPrivateKey) or not isinstance(
            public,
            rsa.RSAPublicKey,
        ):
            msg = "RS256 requires an RSA private and public key"
            raise KeyMaterialError(msg)

        return cls(private_key=private, public_key=public)

    @classmethod
    def from_files(cls, private_keyfile: str | Path, public_keyfile: str | Path) -> "KeyPair":
        """Read and parse a PEM key pair from disk.

        Raises
        ------
        KeyMaterialError
            If a file cannot be read or its content cannot be parsed
        """
        try:
            private_key = Path(private_keyfile).read_bytes()
            public_key = Path(public_keyfile).read_bytes()
        except OSError as e:
            msg = f"Cannot read key file {e.filename}: {e.strerror}"
            raise KeyMaterialError(msg) from e

        return cls.from_rsa_pem(private_key, public_key)


class JWTService:
    """Service for access token creation and verification.

    Tokens are stateless: nothing is stored server side and a token is
    valid until its embedded expiry.

    Examples
    --------
    >>> service = JWTService(KeyPair.from_files("private.pem", "public.pem"))
    >>> access_token = service.generate_token(account.id)
    >>> claims = service.validate_token(access_token.token)
    >>> print(claims.sub)
    """

    ALGORITHM = "RS256"
    ACCESS_TOKEN_TTL_SECONDS = 3600
    REQUIRED_CLAIMS = ("sub", "iat", "exp")

    def __init__(self, keys: KeyPair):
        self._keys = keys

    def generate_token(self, subject_id: str) -> AccessToken:
        """Create a signed access token for an account.

        Parameters
        ----------
        subject_id
            The account id, stored as the ``sub`` claim

        Returns
        -------
        The encoded token and its expiration in epoch seconds

        Raises
        ------
        AppError
            InternalError if signing fails
        """
        issued_at = int(datetime.now(tz=timezone.utc).timestamp())
        expiration = issued_at + self.ACCESS_TOKEN_TTL_SECONDS

        payload = {
            "sub": subject_id,
            "iat": issued_at,
            "exp": expiration,
        }

        try:
            token = jwt.encode(payload, self._keys.private_key, algorithm=self.ALGORITHM)
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.error("Failed to sign access token: %r", e)
            raise internal_error().with_trace(repr(e)) from e

        return AccessToken(token=token, expiration=expiration)

    def validate_token(self, token: str) -> Claims:
        """Verify a token's signature and expiry and return its claims.

        Parameters
        ----------
        token
            The encoded token string

        Returns
        -------
        The decoded claims

        Raises
        ------
        InvalidTokenError
            If the token is expired, malformed, carries a bad signature or
            an invalid issuer (Unauthorized)
        AppError
            InternalError for any other decode failure, such as an
            unexpected algorithm or unusable key
        """
        try:
            payload = jwt.decode(
                token,
                self._keys.public_key,
                algorithms=[self.ALGORITHM],
                options={"require": list(self.REQUIRED_CLAIMS)},
            )
        except (
            jwt.ExpiredSignatureError,
            jwt.DecodeError,
            jwt.InvalidIssuerError,
        ) as e:
            logger.debug("Rejected access token: %s", e)
            raise InvalidTokenError(trace=repr(e)) from e
        except jwt.PyJWTError as e:
            logger.error("Access token validation failed unexpectedly: %r", e)
            raise internal_error().with_trace(repr(e)) from e

        return Claims(
            sub=payload["sub"],
            iat=payload["iat"],
            exp=payload["exp"],
        )

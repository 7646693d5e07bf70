"""Token data classes."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccessToken:
    """An issued bearer token and its absolute expiration (epoch seconds)."""

    token: str
    expiration: int


@dataclass(frozen=True)
class Claims:
    """Signed payload of an access token.

    Attributes
    ----------
    sub
        Subject, the account id
    iat
        Issued-at, epoch seconds
    exp
        Expiration, epoch seconds
    """

    sub: str
    iat: int
    exp: int

"""Account records."""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Account:
    """A stored account.

    ``password`` always holds an encoded hash, never plaintext. ``id`` is
    assigned by storage and treated as opaque.
    """

    id: str
    name: str
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class CreateAccount:
    """Signup input. ``password`` is plaintext until hashed."""

    name: str
    email: str
    password: str = field(repr=False)

    def with_password_hash(self, password_hash: str) -> "CreateAccount":
        return replace(self, password=password_hash)


@dataclass(frozen=True)
class Credentials:
    """Signin input. Never persisted."""

    email: str
    password: str = field(repr=False)

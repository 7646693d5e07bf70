"""Abstract repository interface for accounts.

This interface defines the contract for account persistence.
Implementations can use SQLAlchemy, an in-memory list, or any other
storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from gatehouse.domain.account.models import Account, CreateAccount


@dataclass(frozen=True)
class FindBy:
    """Lookup criterion for ``AccountRepository.find_one``."""

    column: str
    value: str

    @classmethod
    def email(cls, email: str) -> "FindBy":
        return cls(column="email", value=email)

    def __str__(self) -> str:
        return self.column


class AccountRepository(ABC):
    """
    Abstract repository interface for accounts.

    All methods may raise ``RepositoryError`` (or a subclass). Email
    uniqueness must be enforced by the implementation itself and reported
    as ``DuplicateAccountError``; callers pre-check with ``is_account`` only
    to answer the common case quickly.
    """

    @abstractmethod
    async def is_account(self, email: str) -> bool:
        """
        Check if an account exists with the given email.

        Parameters
        ----------
        email
            The email address to check

        Returns
        -------
        True if an account uses this email
        """

    @abstractmethod
    async def signup(self, new_account: CreateAccount) -> Account:
        """
        Store a new account.

        Parameters
        ----------
        new_account
            Account data whose password is already hashed

        Returns
        -------
        The stored account with its storage-assigned id

        Raises
        ------
        DuplicateAccountError
            If the email is already taken
        """

    @abstractmethod
    async def find_one(self, by: FindBy) -> Optional[Account]:
        """
        Find a single account.

        Parameters
        ----------
        by
            Lookup criterion, e.g. ``FindBy.email("a@b.io")``

        Returns
        -------
        Account if found, None otherwise
        """

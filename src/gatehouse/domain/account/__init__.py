"""Account domain - identity records and their storage contract.

Design notes:
- Account id is assigned by storage and treated as an opaque string
- Email is unique; storage enforces it, the service pre-checks it
- The repository interface is defined here, implementations live in
  infrastructure
"""

from gatehouse.domain.account.exceptions import (
    DuplicateAccountError,
    RepositoryError,
    RepositoryUnavailableError,
)
from gatehouse.domain.account.models import Account, CreateAccount, Credentials
from gatehouse.domain.account.repositories import AccountRepository, FindBy

__all__ = [
    "Account",
    "AccountRepository",
    "CreateAccount",
    "Credentials",
    "DuplicateAccountError",
    "FindBy",
    "RepositoryError",
    "RepositoryUnavailableError",
]

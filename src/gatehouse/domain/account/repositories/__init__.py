"""Account repository interfaces."""

from gatehouse.domain.account.repositories.account_repository import (
    AccountRepository,
    FindBy,
)

__all__ = [
    "AccountRepository",
    "FindBy",
]

"""Application services."""

from gatehouse.application.services.account_service import (
    ACCOUNT_EXISTS_MESSAGE,
    AccountService,
    AccountServiceBase,
)

__all__ = [
    "ACCOUNT_EXISTS_MESSAGE",
    "AccountService",
    "AccountServiceBase",
]

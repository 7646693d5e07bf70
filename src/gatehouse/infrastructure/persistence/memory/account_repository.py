"""In-memory implementation of AccountRepository.

Used as a test double. Every operation holds the lock for its whole slice
of state, so concurrent callers observe a sequentially consistent list.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Optional
from uuid import uuid4

from gatehouse.domain.account import (
    Account,
    AccountRepository,
    CreateAccount,
    DuplicateAccountError,
    FindBy,
)

logger = logging.getLogger(__name__)


class InMemoryAccountRepository(AccountRepository):
    """AccountRepository backed by a list guarded by an ``asyncio.Lock``."""

    def __init__(self, accounts: Iterable[Account] = ()):
        self._accounts: list[Account] = list(accounts)
        self._lock = asyncio.Lock()

    async def is_account(self, email: str) -> bool:
        async with self._lock:
            return any(account.email == email for account in self._accounts)

    async def signup(self, new_account: CreateAccount) -> Account:
        async with self._lock:
            if any(account.email == new_account.email for account in self._accounts):
                raise DuplicateAccountError(new_account.email)

            account = Account(
                id=uuid4().hex,
                name=new_account.name,
                email=new_account.email,
                password=new_account.password,
            )
            self._accounts.append(account)

        logger.debug("Stored account in memory: %s", account.id)
        return account

    async def find_one(self, by: FindBy) -> Optional[Account]:
        async with self._lock:
            for account in self._accounts:
                if getattr(account, by.column) == by.value:
                    return account
        return None

    async def count(self) -> int:
        async with self._lock:
            return len(self._accounts)

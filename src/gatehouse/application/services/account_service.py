"""Account service for signup and signin."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

import anyio
import anyio.to_thread

from gatehouse.domain.account import (
    Account,
    AccountRepository,
    CreateAccount,
    Credentials,
    DuplicateAccountError,
    FindBy,
    RepositoryError,
    RepositoryUnavailableError,
)
from gatehouse_auth import (
    CorruptedHashError,
    InvalidCredentialsError,
    PasswordHashingService,
    conflict,
    internal_error,
    service_unavailable,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACCOUNT_EXISTS_MESSAGE = "Account already exists"
DEFAULT_HASH_WORKERS = 4


class AccountServiceBase(ABC):
    """Contract of the account service as seen by the HTTP boundary."""

    @abstractmethod
    async def signup(self, new_account: CreateAccount) -> Account:
        """Create an account. Raises Conflict if the email is taken."""

    @abstractmethod
    async def signin(self, credentials: Credentials) -> Account:
        """Authenticate by email and password. Raises Unauthorized."""


class AccountService(AccountServiceBase):
    """
    Application service for account authentication.

    Orchestrates gatehouse_auth password hashing with the account
    repository to provide:
    - Signup (existence pre-check, hash, store)
    - Signin (lookup, verify)

    Returned accounts carry their password hash. Stripping it before it
    leaves the process is the boundary's job.
    """

    def __init__(
        self,
        repository: AccountRepository,
        password_service: PasswordHashingService,
        hash_workers: int = DEFAULT_HASH_WORKERS,
    ):
        self._repo = repository
        self._password_service = password_service
        self._hash_workers = hash_workers
        self._hash_limiter: anyio.CapacityLimiter | None = None

    async def signup(self, new_account: CreateAccount) -> Account:
        with _translate_repository_errors():
            exists = await self._repo.is_account(new_account.email)
        if exists:
            raise conflict(ACCOUNT_EXISTS_MESSAGE)

        password_hash = await self._run_hasher(
            self._password_service.hash,
            new_account.password,
        )

        with _translate_repository_errors():
            account = await self._repo.signup(
                new_account.with_password_hash(password_hash),
            )

        logger.info("Account created: %s", account.id)
        return account

    async def signin(self, credentials: Credentials) -> Account:
        with _translate_repository_errors():
            account = await self._repo.find_one(FindBy.email(credentials.email))

        if account is None:
            await self._run_hasher(
                self._password_service.verify_dummy,
                credentials.password,
            )
            raise InvalidCredentialsError(trace="unknown email")

        try:
            await self._run_hasher(
                self._password_service.verify,
                credentials.password,
                account.password,
            )
        except CorruptedHashError as e:
            logger.error(
                "Stored password hash of account %s is unusable: %s",
                account.id,
                e.trace,
            )
            await self._run_hasher(
                self._password_service.verify_dummy,
                credentials.password,
            )
            raise InvalidCredentialsError(trace=e.trace) from e

        if self._password_service.needs_rehash(account.password):
            logger.info(
                "Password hash of account %s uses outdated parameters",
                account.id,
            )

        logger.info("Account signed in: %s", account.id)
        return account

    async def _run_hasher(self, func: Callable[..., T], *args: object) -> T:
        """Run password hashing work on the dedicated worker threads."""
        if self._hash_limiter is None:
            self._hash_limiter = anyio.CapacityLimiter(self._hash_workers)
        return await anyio.to_thread.run_sync(func, *args, limiter=self._hash_limiter)


@contextmanager
def _translate_repository_errors() -> Iterator[None]:
    try:
        yield
    except DuplicateAccountError as e:
        logger.info("Storage rejected a duplicate account")
        raise conflict(ACCOUNT_EXISTS_MESSAGE) from e
    except RepositoryUnavailableError as e:
        logger.warning("Account storage unavailable: %s", e.message)
        raise service_unavailable().with_trace(e.message) from e
    except RepositoryError as e:
        logger.error("Account storage failed: %s", e.message)
        raise internal_error().with_trace(e.message) from e

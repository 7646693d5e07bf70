"""SQLAlchemy implementation of AccountRepository.

Each operation runs in its own session taken from the shared session
maker, so one repository instance serves all concurrent requests.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import exc, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gatehouse.domain.account import (
    Account,
    AccountRepository,
    CreateAccount,
    DuplicateAccountError,
    FindBy,
    RepositoryError,
    RepositoryUnavailableError,
)
from gatehouse.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """
    SQLAlchemy implementation of AccountRepository.

    Driver errors are translated: unique constraint violations become
    ``DuplicateAccountError``, lost or refused connections become
    ``RepositoryUnavailableError``, anything else ``RepositoryError``.
    """

    LOOKUP_COLUMNS = {"email": AccountModel.email}

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        """Initialize repository with a session factory.

        Parameters
        ----------
        session_maker
            Shared async session maker bound to the application engine
        """
        self._session_maker = session_maker

    def _to_domain(self, model: AccountModel) -> Account:
        """Map SQLAlchemy model to domain record."""
        return Account(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
        )

    async def is_account(self, email: str) -> bool:
        stmt = select(func.count()).select_from(AccountModel).where(
            AccountModel.email == email,
        )
        with _storage_errors():
            async with self._session_maker() as session:
                count = await session.scalar(stmt)
        return bool(count)

    async def signup(self, new_account: CreateAccount) -> Account:
        model = AccountModel(
            name=new_account.name,
            email=new_account.email,
            password=new_account.password,
        )
        with _storage_errors(duplicate_email=new_account.email):
            async with self._session_maker() as session:
                session.add(model)
                await session.flush()
                account = self._to_domain(model)
                await session.commit()

        logger.info("Created account: %s", account.id)
        return account

    async def find_one(self, by: FindBy) -> Optional[Account]:
        column = self.LOOKUP_COLUMNS.get(by.column)
        if column is None:
            msg = f"Unsupported lookup column: {by}"
            raise RepositoryError(msg)

        stmt = select(AccountModel).where(column == by.value)
        with _storage_errors():
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
                return self._to_domain(model) if model else None


@contextmanager
def _storage_errors(duplicate_email: str | None = None) -> Iterator[None]:
    try:
        yield
    except exc.IntegrityError as e:
        if duplicate_email is not None:
            raise DuplicateAccountError(duplicate_email) from e
        raise RepositoryError(str(e.orig)) from e
    except (exc.DisconnectionError, exc.TimeoutError, OSError) as e:
        raise RepositoryUnavailableError(str(e)) from e
    except exc.DBAPIError as e:
        if e.connection_invalidated:
            raise RepositoryUnavailableError(str(e.orig)) from e
        raise RepositoryError(str(e.orig)) from e
    except exc.SQLAlchemyError as e:
        raise RepositoryError(str(e)) from e

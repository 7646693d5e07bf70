"""Composition root.

Builds the process-wide service graph once at startup: one engine and
session maker, one account repository, one account service and one token
service. All of them are shared by reference across concurrent requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gatehouse.application.services import AccountService, AccountServiceBase
from gatehouse.domain.account import AccountRepository
from gatehouse.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    create_tables,
)
from gatehouse_auth import JWTService, KeyPair, PasswordHashingService
from gatehouse_config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    """Assembled services handed to the HTTP boundary."""

    settings: Settings
    account_service: AccountServiceBase
    jwt_service: JWTService
    engine: AsyncEngine | None = None

    @classmethod
    def build(
        cls,
        settings: Settings,
        repository: AccountRepository,
        keys: KeyPair,
        password_service: PasswordHashingService | None = None,
        engine: AsyncEngine | None = None,
    ) -> Container:
        """Wire services around an already constructed repository."""
        account_service = AccountService(
            repository=repository,
            password_service=password_service or PasswordHashingService(),
            hash_workers=settings.password_hash_workers,
        )
        return cls(
            settings=settings,
            account_service=account_service,
            jwt_service=JWTService(keys),
            engine=engine,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Container:
        """Build the production graph.

        Raises
        ------
        KeyMaterialError
            If the signing key pair cannot be loaded. This is fatal.
        """
        keys = KeyPair.from_files(
            settings.jwt_private_keyfile,
            settings.jwt_public_keyfile,
        )
        logger.info("Loaded signing keys from %s", settings.jwt_private_keyfile.parent)

        engine = create_database_engine(settings.database_url)
        session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        return cls.build(
            settings=settings,
            repository=AccountRepositorySQLAlchemy(session_maker),
            keys=keys,
            engine=engine,
        )

    async def startup(self) -> None:
        """Ensure the schema exists."""
        if self.engine is None:
            return
        logger.info("Ensuring database tables exist...")
        await create_tables(self.engine)

    async def shutdown(self) -> None:
        """Dispose the engine and its connection pool."""
        if self.engine is None:
            return
        await self.engine.dispose()
        logger.info("Database connections closed")


def create_database_engine(database_url: str) -> AsyncEngine:
    """Create the shared async engine.

    SQLite parent directories are created on demand.
    """
    if database_url.startswith("sqlite") and ":memory:" not in database_url:
        db_path = database_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
    )

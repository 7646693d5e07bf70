"""SQLAlchemy implementation for gatehouse persistence.

Provides:
- Base: Declarative base for gatehouse models
- AccountModel: SQLAlchemy model for accounts
- AccountRepositorySQLAlchemy: Repository implementation
- create_tables: Idempotent schema creation
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from gatehouse.infrastructure.persistence.sqlalchemy.base import Base
from gatehouse.infrastructure.persistence.sqlalchemy.models import AccountModel
from gatehouse.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables and data are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "Base",
    "create_tables",
]

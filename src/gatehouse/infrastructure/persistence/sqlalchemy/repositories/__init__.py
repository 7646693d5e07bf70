"""SQLAlchemy repository implementations."""

from gatehouse.infrastructure.persistence.sqlalchemy.repositories.account_repository import (  # NOQA: E501
    AccountRepositorySQLAlchemy,
)

__all__ = ["AccountRepositorySQLAlchemy"]

"""SQLAlchemy models."""

from gatehouse.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)

__all__ = ["AccountModel"]

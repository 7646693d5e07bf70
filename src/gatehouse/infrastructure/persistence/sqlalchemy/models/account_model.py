"""SQLAlchemy model for accounts."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from gatehouse.domain.shared.time import utc_now
from gatehouse.infrastructure.persistence.sqlalchemy.base import Base


class AccountModel(Base):
    """
    SQLAlchemy model for accounts.

    The unique index on ``email`` is the authoritative guard against
    duplicate signups.

    Table: accounts
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    name: Mapped[str] = mapped_column(String, nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # Argon2id PHC string
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<AccountModel(id={self.id}, email={self.email})>"

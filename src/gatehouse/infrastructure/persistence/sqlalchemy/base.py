"""SQLAlchemy declarative base for gatehouse models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for gatehouse models."""

"""In-memory persistence, used as a test double."""

from gatehouse.infrastructure.persistence.memory.account_repository import (
    InMemoryAccountRepository,
)

__all__ = ["InMemoryAccountRepository"]

"""Persistence implementations of the account repository contract.

Structure:
    persistence/
    ├── sqlalchemy/     # SQL databases via SQLAlchemy async ORM
    └── memory/         # In-process list, for tests
"""

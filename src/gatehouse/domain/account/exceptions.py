"""Repository-level exceptions for account storage.

Storage adapters translate their driver errors into these. The account
service maps them onto the error taxonomy.
"""


class RepositoryError(Exception):
    """Base exception for account storage failures."""

    def __init__(self, message: str = "Account storage error"):
        self.message = message
        super().__init__(self.message)


class DuplicateAccountError(RepositoryError):
    """Storage rejected an account because its email is already taken."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class RepositoryUnavailableError(RepositoryError):
    """Storage could not be reached."""

    def __init__(self, message: str = "Account storage is unavailable"):
        super().__init__(message)

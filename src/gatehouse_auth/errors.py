"""Error taxonomy shared by every layer.

Every failure that can reach a caller is classified once into one of a
small, closed set of kinds. Each kind carries a stable integer code (the
HTTP status the boundary uses) and a caller-visible message. Diagnostic
detail goes into ``trace``, which is logged but never serialized.

Usage:
    from gatehouse_auth.errors import conflict, internal_error

    raise conflict("Account already exists")
    raise internal_error().with_trace(str(exc))
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error kinds. Part of the public contract, do not rename."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


ERROR_KIND_TO_CODE: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.INTERNAL_ERROR: 500,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
}


# Fixed messages for kinds that must never echo caller input or internals
UNAUTHORIZED_MESSAGE = (
    "The request was not successful because it lacks valid authentication "
    "credentials"
)
INTERNAL_ERROR_MESSAGE = (
    "The server encountered an unexpected condition that prevented it from "
    "fulfilling the request"
)
SERVICE_UNAVAILABLE_MESSAGE = "The server is not ready to handle the request"


class AppError(Exception):
    """Classified, caller-safe error.

    Attributes
    ----------
    kind
        The taxonomy kind
    message
        Human-readable message, safe to return to the caller
    trace
        Optional diagnostic detail. Logged, never serialized.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        trace: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.trace = trace

    @property
    def code(self) -> int:
        return ERROR_KIND_TO_CODE[self.kind]

    def with_trace(self, trace: str) -> AppError:
        """Return a copy of this error carrying internal diagnostic detail."""
        return AppError(self.kind, self.message, trace=trace)

    def to_dict(self) -> dict[str, int | str]:
        """Serialize to the boundary body shape. ``trace`` is left out."""
        return {"code": self.code, "message": self.message}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __str__(self) -> str:
        return f"Error {self.code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"kind={self.kind.value!r}, "
            f"message={self.message!r}, "
            f"trace={self.trace!r})"
        )


def bad_request(message: str) -> AppError:
    return AppError(ErrorKind.BAD_REQUEST, message)


def validation_failed(message: str) -> AppError:
    return AppError(ErrorKind.VALIDATION_FAILED, message)


def conflict(message: str) -> AppError:
    return AppError(ErrorKind.CONFLICT, message)


def unauthorized() -> AppError:
    return AppError(ErrorKind.UNAUTHORIZED, UNAUTHORIZED_MESSAGE)


def internal_error() -> AppError:
    return AppError(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)


def service_unavailable() -> AppError:
    return AppError(ErrorKind.SERVICE_UNAVAILABLE, SERVICE_UNAVAILABLE_MESSAGE)

"""Centralized exception handlers for the FastAPI application.

Every failure leaves the API with the same body:

    {
        "code": 401,
        "message": "Human-readable error message"
    }

``code`` always equals the HTTP status. Traces attached to errors are
logged, never serialized.

Usage:
    from gatehouse.presentation.api.exception_handlers import (
        setup_exception_handlers,
    )

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gatehouse_auth import AppError, ErrorKind, internal_error
from gatehouse_auth.validation import from_validation_errors

logger = logging.getLogger(__name__)

# First element of a FastAPI error ``loc``; not part of the field path
REQUEST_SOURCES = frozenset({"body", "query", "path", "header", "cookie"})


def _create_error_response(error: AppError) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(status_code=error.code, content=error.to_dict())


def _strip_request_source(
    errors: Iterable[Mapping[str, Any]],
) -> list[dict[str, Any]]:
    stripped = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if loc and loc[0] in REQUEST_SOURCES:
            loc = loc[1:]
        stripped.append({**error, "loc": loc})
    return stripped


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Render an ``AppError``; internal failures are logged with their trace."""
        if exc.kind in (ErrorKind.INTERNAL_ERROR, ErrorKind.SERVICE_UNAVAILABLE):
            logger.error(
                "%s on %s %s: %s",
                exc.kind.value,
                request.method,
                request.url.path,
                exc.trace,
            )
        else:
            logger.warning(
                "%s on %s %s: %s",
                exc.kind.value,
                request.method,
                request.url.path,
                exc.trace or exc.message,
            )
        return _create_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Fold request validation failures into BadRequest or ValidationFailed."""
        error = from_validation_errors(_strip_request_source(exc.errors()))
        logger.info(
            "Rejected payload on %s %s: %s",
            request.method,
            request.url.path,
            error.message,
        )
        return _create_error_response(error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Keep framework errors (404, 405...) in the common error shape."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"code": exc.status_code, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with the generic internal error."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(internal_error())

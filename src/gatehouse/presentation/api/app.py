"""FastAPI application factory.

Creates and configures the FastAPI application with its router and
exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.

Serving:
    uvicorn --factory gatehouse.presentation.api.app:create_app
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI

from gatehouse.container import Container
from gatehouse.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from gatehouse.presentation.api.routers import accounts_router
from gatehouse_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    - Console output with timestamps and module names
    - Configurable log level for gatehouse modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger("gatehouse").setLevel(log_level)
    logging.getLogger("gatehouse_auth").setLevel(log_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Accounts",
        "description": """Account signup and signin.

**Signup:**
- Name of at least 3 characters
- Email of 3 to 255 bytes
- Password of 8 to 72 bytes with upper, lower, digit and special character

**Signin:**
- Returns an RS256 access token valid for one hour
- Sets the same token as an HttpOnly `Authorization` cookie
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    container: Container = app.state.container

    logger.info("Starting Gatehouse API v%s...", API_VERSION)
    await container.startup()
    yield

    logger.info("Shutting down Gatehouse API...")
    await container.shutdown()


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(accounts_router, tags=["Accounts"])
    return v1_router


def create_app(
    settings: Settings | None = None,
    container: Container | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    container
        Optional prebuilt service graph. Built from ``settings`` when
        omitted, which loads the signing keys.

    Returns
    -------
    Configured FastAPI application instance.

    Raises
    ------
    KeyMaterialError
        If the signing keys cannot be loaded
    """
    _configure_logging()

    if container is not None:
        settings = container.settings
    elif settings is None:
        settings = get_settings()

    if container is None:
        container = Container.from_settings(settings)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Account signup, signin and RS256 access token issuance.",
        version=API_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.container = container

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint. Unversioned for load balancers."""
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    return app

"""FastAPI dependency injection for the Gatehouse API.

Provides dependencies for:
- The composition root built at startup
- Service instances taken from it
- Authentication (claims of the presented access token)
"""

import logging
from typing import Annotated

from fastapi import Cookie, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gatehouse.application.services import AccountServiceBase
from gatehouse.container import Container
from gatehouse_auth import Claims, JWTService, unauthorized
from gatehouse_config import Settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

# Cookie carrying the access token after signin
ACCESS_TOKEN_COOKIE = "Authorization"


def get_container(request: Request) -> Container:
    """Return the container attached to the application at creation."""
    return request.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]


def get_settings_dep(container: ContainerDep) -> Settings:
    return container.settings


def get_account_service(container: ContainerDep) -> AccountServiceBase:
    return container.account_service


def get_jwt_service(container: ContainerDep) -> JWTService:
    return container.jwt_service


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
AccountServiceDep = Annotated[AccountServiceBase, Depends(get_account_service)]
JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]


# -----------------------------------------------------------------------------
# Access token guard
# -----------------------------------------------------------------------------


async def require_access_token(
    jwt_service: JWTServiceDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ] = None,
    cookie_token: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> Claims:
    """
    FastAPI dependency returning the claims of a valid access token.

    The ``Authorization`` cookie set at signin is consulted first, then
    the ``Authorization: Bearer`` header.

    Parameters
    ----------
    jwt_service
        Token service holding the verification key
    credentials
        Bearer token from the Authorization header
    cookie_token
        Token from the Authorization cookie

    Returns
    -------
    Verified claims

    Raises
    ------
    AppError
        Unauthorized if no token is presented or it does not verify
    """
    token = cookie_token or (credentials.credentials if credentials else None)
    if not token:
        raise unauthorized().with_trace("no access token presented")

    return jwt_service.validate_token(token)


RequireAccessToken = Annotated[Claims, Depends(require_access_token)]

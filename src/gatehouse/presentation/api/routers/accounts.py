"""Accounts router for signup, signin and session introspection."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from gatehouse.presentation.api.dependencies import (
    ACCESS_TOKEN_COOKIE,
    AccountServiceDep,
    JWTServiceDep,
    RequireAccessToken,
    SettingsDep,
)
from gatehouse.presentation.api.schemas import (
    AccessTokenResponse,
    AccountResponse,
    ClaimsResponse,
    CreateAccountRequest,
    CredentialsRequest,
    ErrorResponse,
)
from gatehouse_auth import AccessToken
from gatehouse_config import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

# The access token cookie is sent to every API route
ACCESS_TOKEN_COOKIE_PATH = "/api"


def _set_access_token_cookie(
    response: Response,
    access_token: AccessToken,
    settings: Settings,
) -> None:
    """Set the access token as an HttpOnly cookie expiring with the token.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript
    - Secure: Only sent over HTTPS (when api_cookie_secure=True)
    - SameSite=Strict: Never sent on cross-site requests
    """
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token.token,
        expires=datetime.fromtimestamp(access_token.expiration, tz=timezone.utc),
        path=ACCESS_TOKEN_COOKIE_PATH,
        secure=settings.api_cookie_secure,
        httponly=True,
        samesite="strict",
    )


@router.post(
    "/signup",
    summary="Create an account",
    responses={
        200: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Malformed payload"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        422: {"model": ErrorResponse, "description": "Field rules violated"},
    },
)
async def signup(
    request: CreateAccountRequest,
    account_service: AccountServiceDep,
) -> AccountResponse:
    """
    Register a new account.

    The password is stored as an Argon2id hash and never returned.
    """
    account = await account_service.signup(request.to_domain())
    return AccountResponse.from_domain(account)


@router.post(
    "/signin",
    status_code=status.HTTP_200_OK,
    summary="Authenticate an account",
    responses={
        200: {"description": "Signin successful"},
        400: {"model": ErrorResponse, "description": "Malformed payload"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        422: {"model": ErrorResponse, "description": "Invalid email"},
    },
)
async def signin(
    request: CredentialsRequest,
    response: Response,
    account_service: AccountServiceDep,
    jwt_service: JWTServiceDep,
    settings: SettingsDep,
) -> AccessTokenResponse:
    """
    Authenticate with email and password.

    Returns a signed access token. The same token is set as the
    ``Authorization`` cookie, expiring together with the token.
    """
    account = await account_service.signin(request.to_domain())
    access_token = jwt_service.generate_token(account.id)

    _set_access_token_cookie(response, access_token, settings)
    return AccessTokenResponse.from_domain(access_token)


@router.get(
    "/session",
    summary="Inspect the current access token",
    responses={
        200: {"description": "Token is valid"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    },
)
async def session(claims: RequireAccessToken) -> ClaimsResponse:
    return ClaimsResponse.from_domain(claims)

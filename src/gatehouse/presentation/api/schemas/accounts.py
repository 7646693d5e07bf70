"""Account schemas for request/response models."""

from pydantic import BaseModel, ConfigDict, Field

from gatehouse.domain.account import Account, CreateAccount, Credentials
from gatehouse_auth import AccessToken, Claims
from gatehouse_auth.validation import EmailAddress, Name, StrongPassword


class CreateAccountRequest(BaseModel):
    """Request schema for signup."""

    name: Name
    email: EmailAddress
    password: StrongPassword

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "your_name",
                "email": "your@email.com",
                "password": "stR0ngP4ssw0rd!",
            },
        },
    )

    def to_domain(self) -> CreateAccount:
        return CreateAccount(name=self.name, email=self.email, password=self.password)


class CredentialsRequest(BaseModel):
    """Request schema for signin. The password is not strength-checked."""

    email: EmailAddress
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "your@email.com",
                "password": "stR0ngP4ssw0rd!",
            },
        },
    )

    def to_domain(self) -> Credentials:
        return Credentials(email=self.email, password=self.password)


class AccountResponse(BaseModel):
    """Response schema for account data. Never carries the password hash."""

    id: str
    name: str
    email: str

    @classmethod
    def from_domain(cls, account: Account) -> "AccountResponse":
        return cls(id=account.id, name=account.name, email=account.email)


class AccessTokenResponse(BaseModel):
    """Response schema for an issued access token."""

    token: str
    expires_at: int = Field(..., description="Expiration, epoch seconds")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "eyJhbGciOiJSUzI1NiIsInR5cCI6IkpXVCJ9...",
                "expires_at": 1733398600,
            },
        },
    )

    @classmethod
    def from_domain(cls, access_token: AccessToken) -> "AccessTokenResponse":
        return cls(token=access_token.token, expires_at=access_token.expiration)


class ClaimsResponse(BaseModel):
    """Response schema for the claims of the presented token."""

    sub: str
    iat: int
    exp: int

    @classmethod
    def from_domain(cls, claims: Claims) -> "ClaimsResponse":
        return cls(sub=claims.sub, iat=claims.iat, exp=claims.exp)


class ErrorResponse(BaseModel):
    """Body of every error response."""

    code: int
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": 401,
                "message": (
                    "The request was not successful because it lacks valid "
                    "authentication credentials"
                ),
            },
        },
    )

"""Unit tests for the error taxonomy."""

import pytest

from gatehouse_auth import (
    AppError,
    CorruptedHashError,
    ErrorKind,
    InvalidCredentialsError,
    InvalidTokenError,
    bad_request,
    conflict,
    internal_error,
    service_unavailable,
    unauthorized,
    validation_failed,
)
from gatehouse_auth.errors import (
    INTERNAL_ERROR_MESSAGE,
    SERVICE_UNAVAILABLE_MESSAGE,
    UNAUTHORIZED_MESSAGE,
)


class TestErrorCodes:
    @pytest.mark.parametrize(
        ("error", "kind", "code"),
        [
            (bad_request("Missing field `email`"), ErrorKind.BAD_REQUEST, 400),
            (unauthorized(), ErrorKind.UNAUTHORIZED, 401),
            (conflict("Account already exists"), ErrorKind.CONFLICT, 409),
            (validation_failed("{}"), ErrorKind.VALIDATION_FAILED, 422),
            (internal_error(), ErrorKind.INTERNAL_ERROR, 500),
            (service_unavailable(), ErrorKind.SERVICE_UNAVAILABLE, 503),
        ],
    )
    def test_kind_maps_to_code(self, error, kind, code):
        assert error.kind is kind
        assert error.code == code

    def test_fixed_messages(self):
        assert unauthorized().message == UNAUTHORIZED_MESSAGE
        assert internal_error().message == INTERNAL_ERROR_MESSAGE
        assert service_unavailable().message == SERVICE_UNAVAILABLE_MESSAGE


class TestAppError:
    """Tests for AppError behaviour."""

    def test_to_dict_never_includes_trace(self):
        error = internal_error().with_trace("psycopg: connection refused")

        assert error.to_dict() == {"code": 500, "message": INTERNAL_ERROR_MESSAGE}

    def test_with_trace_returns_copy(self):
        original = internal_error()
        traced = original.with_trace("detail")

        assert original.trace is None
        assert traced.trace == "detail"
        assert traced == original

    def test_equality_ignores_trace(self):
        assert conflict("x").with_trace("a") == conflict("x").with_trace("b")
        assert conflict("x") != conflict("y")
        assert conflict("x") != bad_request("x")

    def test_str(self):
        assert str(conflict("Account already exists")) == (
            "Error 409: Account already exists"
        )

    def test_is_raisable(self):
        with pytest.raises(AppError) as exc_info:
            raise conflict("Account already exists")
        assert exc_info.value.code == 409


class TestAuthExceptions:
    def test_invalid_credentials_is_plain_unauthorized(self):
        error = InvalidCredentialsError(trace="unknown email")

        assert error == unauthorized()
        assert error.to_dict() == unauthorized().to_dict()

    def test_invalid_token_is_plain_unauthorized(self):
        assert InvalidTokenError() == unauthorized()

    def test_corrupted_hash_is_internal(self):
        assert CorruptedHashError(trace="bad hash") == internal_error()

"""Tests for padelapi.exceptions -- hierarchy, exit codes, status mapping."""

from __future__ import annotations

import pytest

from padelapi import exit_codes
from padelapi.exceptions import (
    AuthError,
    ConfigError,
    DecodeError,
    HttpStatusError,
    InvalidUsageError,
    NetworkError,
    NotFoundError,
    PadelApiError,
    ServerError,
    TimeoutError_,
    error_for_status,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (PadelApiError("x"), exit_codes.EXIT_GENERIC_FAILURE),
            (InvalidUsageError("x"), exit_codes.EXIT_INVALID_USAGE),
            (ConfigError("x"), exit_codes.EXIT_GENERIC_FAILURE),
            (NetworkError("x"), exit_codes.EXIT_CONNECTION_ERROR),
            (TimeoutError_("x"), exit_codes.EXIT_CONNECTION_ERROR),
            (DecodeError("x"), exit_codes.EXIT_DECODE_ERROR),
            (HttpStatusError("x", 400), exit_codes.EXIT_HTTP_ERROR),
            (AuthError("x", 401), exit_codes.EXIT_AUTH_FAILURE),
            (NotFoundError("x", 404), exit_codes.EXIT_NOT_FOUND),
            (ServerError("x", 500), exit_codes.EXIT_HTTP_ERROR),
        ],
    )
    def test_exit_codes(self, exc: PadelApiError, code: int) -> None:
        assert exc.exit_code == code
        assert isinstance(exc, PadelApiError)

    def test_exit_code_override(self) -> None:
        assert PadelApiError("x", exit_code=42).exit_code == 42
        assert PadelApiError("y").exit_code == exit_codes.EXIT_GENERIC_FAILURE

    def test_timeout_does_not_shadow_builtin(self) -> None:
        assert not issubclass(TimeoutError_, TimeoutError)

    def test_transient_flags(self) -> None:
        assert NetworkError("x").transient
        assert TimeoutError_("x").transient
        assert not DecodeError("x").transient
        assert not NotFoundError("x", 404).transient
        assert ServerError("x", 503).transient


class TestErrorForStatus:
    @pytest.mark.parametrize(
        ("status", "cls"),
        [
            (400, HttpStatusError),
            (401, AuthError),
            (403, AuthError),
            (404, NotFoundError),
            (409, HttpStatusError),
            (500, ServerError),
            (504, ServerError),
        ],
    )
    def test_class_by_status(self, status: int, cls: type) -> None:
        exc = error_for_status(status, None)
        assert type(exc) is cls
        assert exc.status_code == status

    def test_message_from_body(self) -> None:
        assert str(error_for_status(404, {"message": "User not found"})) == (
            "HTTP 404: User not found"
        )
        assert str(error_for_status(400, {"error": "bad"})) == "HTTP 400: bad"
        assert str(error_for_status(422, {"detail": "missing email"})) == (
            "HTTP 422: missing email"
        )

    def test_message_without_detail(self) -> None:
        assert str(error_for_status(500, {})) == "HTTP 500"
        assert str(error_for_status(500, None)) == "HTTP 500"

    def test_body_kept(self) -> None:
        body = {"message": "nope", "code": "E42"}
        assert error_for_status(400, body).body == body

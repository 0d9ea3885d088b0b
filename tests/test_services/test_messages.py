"""Tests for padelapi.services.messages.describe_error."""

from __future__ import annotations

import pytest

from padelapi.exceptions import (
    ConfigError,
    DecodeError,
    NetworkError,
    TimeoutError_,
    error_for_status,
)
from padelapi.services import describe_error
from padelapi.services.messages import GENERIC_MESSAGE


class TestStatusMessages:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (401, "Authentication required. Please log in."),
            (403, "Access denied. You don't have permission for this action."),
            (404, "Resource not found."),
            (429, "Too many requests. Please try again later."),
            (500, "Server error. Please try again later."),
            (503, "Service temporarily unavailable. Please try again later."),
        ],
    )
    def test_canned_messages_ignore_server_detail(self, status: int, expected: str) -> None:
        exc = error_for_status(status, {"message": "internal detail"})
        assert describe_error(exc) == expected

    @pytest.mark.parametrize("status", [400, 409, 422])
    def test_server_detail_preferred(self, status: int) -> None:
        exc = error_for_status(status, {"message": "Email already taken"})
        assert describe_error(exc) == "Email already taken"

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (400, "Invalid request. Please check your input."),
            (409, "Conflict. Resource already exists."),
            (422, "Validation failed. Please check your input."),
        ],
    )
    def test_fallback_without_detail(self, status: int, expected: str) -> None:
        assert describe_error(error_for_status(status, {})) == expected

    def test_error_key_used_as_detail(self) -> None:
        assert describe_error(error_for_status(400, {"error": "bad email"})) == "bad email"

    def test_unlisted_server_error(self) -> None:
        assert describe_error(error_for_status(502, None)) == "Server error. Please try again later."

    def test_unlisted_client_error(self) -> None:
        assert describe_error(error_for_status(418, {"message": "teapot"})) == "teapot"
        assert describe_error(error_for_status(418, None)) == GENERIC_MESSAGE


class TestOtherErrors:
    def test_timeout(self) -> None:
        assert describe_error(TimeoutError_("x")) == "Request timeout. Please try again."

    def test_network(self) -> None:
        assert describe_error(NetworkError("x")) == "Network error. Please check your connection."

    def test_decode(self) -> None:
        assert "could not be read" in describe_error(DecodeError("x"))

    def test_other_library_error_uses_message(self) -> None:
        assert describe_error(ConfigError("PADELAPI_TIMEOUT must be a number")) == (
            "PADELAPI_TIMEOUT must be a number"
        )

    def test_foreign_exception(self) -> None:
        assert describe_error(RuntimeError("boom")) == "boom"
        assert describe_error(RuntimeError()) == GENERIC_MESSAGE

"""Exception hierarchy for padelapi.

All exceptions inherit from :class:`PadelApiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`padelapi.exit_codes`
and a ``transient`` flag telling callers whether trying again later may
succeed.  The CLI entry point in :func:`padelapi.app.main` catches
``PadelApiError`` and exits with the appropriate code.

Subclass hierarchy::

    PadelApiError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConfigError         (exit 1)
    +-- NetworkError        (exit 6)  transient
    +-- TimeoutError_       (exit 6)  transient
    +-- DecodeError         (exit 7)
    +-- HttpStatusError     (exit 5)
        +-- AuthError       (exit 3)
        +-- NotFoundError   (exit 4)
        +-- ServerError     (exit 5)  transient
"""

from __future__ import annotations

from typing import Any, Optional

from padelapi.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
)


class PadelApiError(Exception):
    """Base exception for all padelapi errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`padelapi.exit_codes`.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE
    transient: bool = False

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(PadelApiError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(PadelApiError):
    """Raised for configuration problems (invalid JSON, bad values in env vars)."""

    exit_code = EXIT_GENERIC_FAILURE


class NetworkError(PadelApiError):
    """Raised when no response was received (DNS, connection refused, reset)."""

    exit_code = EXIT_CONNECTION_ERROR
    transient = True


class TimeoutError_(PadelApiError):
    """Raised when a request exceeded its time budget and was aborted.

    Named with a trailing underscore to avoid shadowing the built-in
    ``TimeoutError``.
    """

    exit_code = EXIT_CONNECTION_ERROR
    transient = True


class DecodeError(PadelApiError):
    """Raised when a response body does not match its declared content type."""

    exit_code = EXIT_DECODE_ERROR

    def __init__(self, message: str, content_type: str = "", text: str = ""):
        super().__init__(message)
        self.content_type = content_type
        self.text = text


class HttpStatusError(PadelApiError):
    """Raised when the API answered with a non-2xx status.

    Attributes:
        status_code: The numeric HTTP status.
        body: Best-effort parsed error body -- the decoded JSON when the
            server sent JSON, otherwise ``{"message": <raw text>}``.
    """

    exit_code = EXIT_HTTP_ERROR

    def __init__(self, message: str, status_code: int, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def transient(self) -> bool:  # type: ignore[override]
        return self.status_code >= 500


class AuthError(HttpStatusError):
    """Raised on HTTP 401 / 403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(HttpStatusError):
    """Raised on HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(HttpStatusError):
    """Raised on HTTP 5xx."""

    exit_code = EXIT_HTTP_ERROR


def _extract_message(body: Any) -> str:
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if value:
                return str(value)
        return ""
    if body is None:
        return ""
    return str(body)[:200]


def error_for_status(status_code: int, body: Any = None) -> HttpStatusError:
    """Build the :class:`HttpStatusError` subclass matching *status_code*.

    The message is ``"HTTP <status>: <detail>"`` where the detail comes from
    the body's ``message``, ``error`` or ``detail`` field when present.

    Args:
        status_code: The HTTP status of the failed response.
        body: The parsed error body.

    Returns:
        An exception instance ready to be raised.
    """
    detail: Optional[str] = _extract_message(body)
    prefix = f"HTTP {status_code}"
    message = f"{prefix}: {detail}" if detail else prefix

    cls: type[HttpStatusError]
    if status_code in (401, 403):
        cls = AuthError
    elif status_code == 404:
        cls = NotFoundError
    elif status_code >= 500:
        cls = ServerError
    else:
        cls = HttpStatusError
    return cls(message, status_code=status_code, body=body)

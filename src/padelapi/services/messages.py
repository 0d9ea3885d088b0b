"""User-facing messages for client errors.

:func:`describe_error` turns any exception raised through
:class:`~padelapi.client.ApiClient` into a sentence fit for an end user.
The choice is driven by the exception *type* and HTTP status only; the
server's own message is used just for the statuses where it is the most
useful thing to show (400, 409, 422 and unlisted statuses).
"""

from __future__ import annotations

from padelapi.exceptions import (
    DecodeError,
    HttpStatusError,
    NetworkError,
    PadelApiError,
    TimeoutError_,
)

GENERIC_MESSAGE = "An unexpected error occurred."

_STATUS_MESSAGES: dict[int, str] = {
    401: "Authentication required. Please log in.",
    403: "Access denied. You don't have permission for this action.",
    404: "Resource not found.",
    429: "Too many requests. Please try again later.",
    500: "Server error. Please try again later.",
    503: "Service temporarily unavailable. Please try again later.",
}

# Statuses where the server's explanation beats a canned sentence.
_SERVER_DETAIL_FALLBACKS: dict[int, str] = {
    400: "Invalid request. Please check your input.",
    409: "Conflict. Resource already exists.",
    422: "Validation failed. Please check your input.",
}


def _server_detail(exc: HttpStatusError) -> str:
    body = exc.body
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return ""


def describe_error(exc: BaseException) -> str:
    """Return a user-facing message for *exc*.

    Example::

        try:
            await users.get_user("42")
        except PadelApiError as exc:
            output.error(describe_error(exc))
    """
    if isinstance(exc, HttpStatusError):
        status = exc.status_code
        if status in _STATUS_MESSAGES:
            return _STATUS_MESSAGES[status]
        detail = _server_detail(exc)
        if status in _SERVER_DETAIL_FALLBACKS:
            return detail or _SERVER_DETAIL_FALLBACKS[status]
        if status >= 500:
            return _STATUS_MESSAGES[500]
        return detail or GENERIC_MESSAGE
    if isinstance(exc, TimeoutError_):
        return "Request timeout. Please try again."
    if isinstance(exc, NetworkError):
        return "Network error. Please check your connection."
    if isinstance(exc, DecodeError):
        return "The server sent a response that could not be read."
    if isinstance(exc, PadelApiError):
        return exc.message or GENERIC_MESSAGE
    return str(exc) or GENERIC_MESSAGE

"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~padelapi.exceptions.PadelApiError` subclass.
Shell scripts wrapping the ``padelapi`` command can inspect the exit code to
tell a rejected credential from an unreachable server without parsing stderr.

Example::

    $ padelapi users get 42
    $ echo $?
    4   # EXIT_NOT_FOUND -- no user with that id
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_FAILURE = 3
"""Authentication or authorisation failed (HTTP 401 / 403)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_HTTP_ERROR = 5
"""The API answered with a non-2xx status (HTTP 5xx and unclassified 4xx)."""

EXIT_CONNECTION_ERROR = 6
"""The server could not be reached in time (timeout, DNS failure, connection refused)."""

EXIT_DECODE_ERROR = 7
"""The response body could not be decoded according to its content type."""

"""Endpoint services built on :class:`~padelapi.client.ApiClient`.

Each service takes an open client in its constructor; nothing here keeps a
module-level client.

Classes:
    :class:`UserApiService` -- user directory reads and mutations.
    :class:`AuthApiService` -- registration, login and password flows.
    :class:`UploadApiService` -- avatar and document uploads.

Functions:
    :func:`check_api_health` -- whether the backend reports itself healthy.
    :func:`describe_error` -- user-facing message for a client error.
    :func:`run_batch` -- run several operations with bounded concurrency.
"""

from padelapi.services import endpoints
from padelapi.services.auth import AuthApiService
from padelapi.services.batch import run_batch
from padelapi.services.health import check_api_health
from padelapi.services.messages import describe_error
from padelapi.services.uploads import UploadApiService
from padelapi.services.users import UserApiService

__all__ = [
    "AuthApiService",
    "UploadApiService",
    "UserApiService",
    "check_api_health",
    "describe_error",
    "endpoints",
    "run_batch",
]

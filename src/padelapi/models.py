"""Canonical Pydantic models shared across all padelapi modules.

The models fall into two groups:

**Configuration models** -- built in code or loaded from the user's config
directory:
    :class:`RetryConfig`, :class:`ClientConfig`, :class:`OutputConfig`, and
    :class:`GlobalConfig`.

**Payload models** -- shapes exchanged with callers of the client and the
endpoint services:
    :class:`HTTPMethod`, :class:`ClientResponse`, :class:`ApiEnvelope`,
    :class:`PaginatedResponse`, and :class:`BatchResult`.

Two different things were historically both called "API response": the
HTTP-level result of a call (status, headers, body) and the application-level
``{"success": ..., "data": ...}`` envelope some endpoints wrap their payload
in.  They are kept apart here as :class:`ClientResponse` and
:class:`ApiEnvelope`.

All durations are in seconds.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


def _default_headers() -> dict[str, str]:
    return {"Content-Type": "application/json", "Accept": "application/json"}


# --- Client Config ---


class RetryConfig(BaseModel):
    """Exponential-backoff settings for :class:`~padelapi.client.retry.RetryPolicy`.

    The delay before attempt ``n + 1`` is
    ``min(initial_delay * backoff_factor ** (n - 1), max_delay)``.
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1, description="Total attempts, first one included")
    initial_delay: float = Field(default=1.0, ge=0, description="Delay before the second attempt")
    max_delay: float = Field(default=5.0, ge=0, description="Upper bound for any single delay")
    backoff_factor: float = Field(default=2.0, ge=1, description="Multiplier applied per attempt")


class ClientConfig(BaseModel):
    """Settings for one :class:`~padelapi.client.ApiClient` instance.

    Immutable once built: a client never changes its own configuration.  Use
    :meth:`pydantic.BaseModel.model_copy` with ``update=`` to derive a
    variant.

    Example::

        ClientConfig(
            base_url="https://padel.example.com",
            timeout=10,
            retry=RetryConfig(max_attempts=5),
        )
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default="", description="Prefix prepended to every request path")
    default_headers: dict[str, str] = Field(default_factory=_default_headers)
    timeout: float = Field(default=30.0, gt=0, description="Per-call deadline in seconds")
    retry: RetryConfig = Field(default_factory=RetryConfig)
    cache_ttl: float = Field(
        default=300.0, ge=0, description="TTL for cached GETs that do not pass their own"
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


# --- Global Config ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/padelapi/config.json``.

    Loaded and saved by :func:`~padelapi.config.load_global_config` and
    :func:`~padelapi.config.save_global_config`.  Values here have the lowest
    precedence; see :func:`~padelapi.config.resolve_client_config`.
    """

    base_url: str = ""
    timeout: float = Field(default=30.0, gt=0)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    cache_ttl: float = Field(default=300.0, ge=0)
    verify_ssl: bool = True
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Payload Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP verbs the client sends."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ClientResponse(BaseModel):
    """HTTP-level result of a call made with :meth:`ApiClient.send`."""

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ApiEnvelope(BaseModel):
    """Application-level ``{"success": ..., "data": ...}`` wrapper.

    Some endpoints answer with this envelope inside a 2xx body; it says
    nothing about the HTTP status of the call that carried it.
    """

    model_config = ConfigDict(extra="allow")

    success: bool
    data: Any = None
    message: Optional[str] = None
    error: Any = None


class PaginatedResponse(BaseModel):
    """One page of a list endpoint such as ``GET /api/users``."""

    model_config = ConfigDict(populate_by_name=True)

    data: list[Any] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = Field(default=0, alias="totalPages")


class BatchResult(BaseModel):
    """Outcome of one operation run by :func:`~padelapi.services.run_batch`."""

    success: bool
    data: Any = None
    error: Optional[str] = None


def is_api_success(payload: Any) -> bool:
    """Return ``True`` if *payload* is an envelope with ``success: true``."""
    envelope = _as_envelope(payload)
    return envelope is not None and envelope.success


def is_api_error(payload: Any) -> bool:
    """Return ``True`` if *payload* is an envelope with ``success: false``."""
    envelope = _as_envelope(payload)
    return envelope is not None and not envelope.success


def _as_envelope(payload: Any) -> Optional[ApiEnvelope]:
    if isinstance(payload, ApiEnvelope):
        return payload
    if not isinstance(payload, dict) or not isinstance(payload.get("success"), bool):
        return None
    try:
        return ApiEnvelope.model_validate(payload)
    except ValidationError:
        return None

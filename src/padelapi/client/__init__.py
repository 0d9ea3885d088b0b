"""HTTP client module for padelapi.

Provides :class:`ApiClient`, a non-blocking client backed by
:class:`httpx.AsyncClient` with opt-in response caching, a request/response
interceptor pipeline, a per-call deadline, and retry with exponential
backoff.

Classes:
    :class:`ApiClient` -- the request executor and HTTP verb helpers.
    :class:`RetryPolicy` -- transport-agnostic exponential-backoff retry.
    :class:`InterceptorPipeline` -- ordered request/response transforms.

Example::

    from padelapi.client import ApiClient, bearer_token_interceptor

    async with ApiClient(config) as client:
        client.add_request_interceptor(bearer_token_interceptor(lambda: token))
        user = await client.get("/api/users/42")
"""

from padelapi.client.api_client import ApiClient
from padelapi.client.interceptors import (
    InterceptorPipeline,
    RequestDescriptor,
    RequestOptions,
    bearer_token_interceptor,
    status_logging_interceptor,
)
from padelapi.client.retry import RetryPolicy, is_retryable

__all__ = [
    "ApiClient",
    "InterceptorPipeline",
    "RequestDescriptor",
    "RequestOptions",
    "RetryPolicy",
    "bearer_token_interceptor",
    "is_retryable",
    "status_logging_interceptor",
]

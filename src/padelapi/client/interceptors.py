"""Request/response interceptor pipeline for :class:`~padelapi.client.ApiClient`.

This module provides three core components:

* :class:`RequestOptions` and :class:`RequestDescriptor` -- the mutable
  ``(url, options)`` pair threaded through the request chain.
* :class:`InterceptorPipeline` -- two ordered, append-only registries of
  request and response interceptors, applied in registration order.
* Stock interceptors for the cross-cutting concerns every caller of the
  padel API needs: :func:`bearer_token_interceptor` and
  :func:`status_logging_interceptor`.

The chain follows a pipeline pattern: each interceptor receives the output
of the previous one, enabling additive transformations (attach an auth
header, then log).  Interceptors may be plain functions or coroutine
functions; the latter are awaited in place so ordering is preserved.

Interceptors must not issue requests through the client that runs them.
Nothing prevents it, but such a call re-enters the same pipeline.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from padelapi.output import get_output


@dataclass
class RequestOptions:
    """Everything about an outgoing request except its URL.

    Attributes:
        method: HTTP method (e.g. ``"GET"``).
        headers: Request headers, already merged with the client defaults.
        params: Query parameters.
        json: JSON-serialisable body.
        content: Raw body.
        data: Form fields (sent alongside ``files`` for uploads).
        files: Multipart file fields, in any shape :mod:`httpx` accepts.
    """

    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
    json: Any = None
    content: Optional[Union[str, bytes]] = None
    data: Optional[dict[str, Any]] = None
    files: Optional[dict[str, Any]] = None


@dataclass
class RequestDescriptor:
    """The ``(url, options)`` pair handed from one request interceptor to the next."""

    url: str
    options: RequestOptions


RequestInterceptor = Callable[
    [str, RequestOptions],
    Union[tuple[str, RequestOptions], Awaitable[tuple[str, RequestOptions]]],
]
ResponseInterceptor = Callable[
    [httpx.Response],
    Union[httpx.Response, Awaitable[httpx.Response]],
]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class InterceptorPipeline:
    """Ordered request and response interceptor registries.

    Registration is append-only for the lifetime of the owning client:
    there is no way to remove an interceptor once added.
    """

    def __init__(self) -> None:
        self._request: list[RequestInterceptor] = []
        self._response: list[ResponseInterceptor] = []

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> None:
        """Append *interceptor* to the end of the request chain.

        Args:
            interceptor: Called as ``interceptor(url, options)`` and must
                return the (possibly modified) ``(url, options)`` pair.
        """
        self._request.append(interceptor)

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> None:
        """Append *interceptor* to the end of the response chain.

        Args:
            interceptor: Called as ``interceptor(response)`` and must return
                the (possibly replaced) :class:`httpx.Response`.
        """
        self._response.append(interceptor)

    @property
    def request_interceptors(self) -> tuple[RequestInterceptor, ...]:
        return tuple(self._request)

    @property
    def response_interceptors(self) -> tuple[ResponseInterceptor, ...]:
        return tuple(self._response)

    async def apply_request(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        """Run every request interceptor in registration order."""
        url, options = descriptor.url, descriptor.options
        for interceptor in self._request:
            url, options = await _resolve(interceptor(url, options))
        return RequestDescriptor(url=url, options=options)

    async def apply_response(self, response: httpx.Response) -> httpx.Response:
        """Run every response interceptor in registration order."""
        for interceptor in self._response:
            response = await _resolve(interceptor(response))
        return response


# ------------------------------------------------------------------ #
# Stock interceptors
# ------------------------------------------------------------------ #


def bearer_token_interceptor(
    token_provider: Callable[[], Optional[str]],
) -> RequestInterceptor:
    """Build a request interceptor that attaches ``Authorization: Bearer <token>``.

    *token_provider* is called for every request, so a refreshed token is
    picked up without re-registering.  When it returns a falsy value the
    request goes out unauthenticated.  An ``Authorization`` header set
    explicitly by the caller is left untouched.

    Example::

        client.add_request_interceptor(bearer_token_interceptor(session.access_token))
    """

    def _interceptor(url: str, options: RequestOptions) -> tuple[str, RequestOptions]:
        token = token_provider()
        if not token:
            return url, options
        if any(name.lower() == "authorization" for name in options.headers):
            return url, options
        options.headers = {**options.headers, "Authorization": f"Bearer {token}"}
        return url, options

    return _interceptor


def status_logging_interceptor(
    on_unauthorized: Optional[Callable[[httpx.Response], None]] = None,
) -> ResponseInterceptor:
    """Build a response interceptor that reports common failure statuses.

    * 401 -- logged as a warning, then *on_unauthorized* is invoked (a CLI
      can clear its stored token there, a UI can send the user to login).
    * 403 -- logged as a warning.
    * 5xx -- logged as a warning.

    The response is returned unchanged; raising is left to the client.
    """

    def _interceptor(response: httpx.Response) -> httpx.Response:
        status = response.status_code
        output = get_output()
        if status == 401:
            output.warning(f"Unauthorized: {response.request.method} {response.request.url}")
            if on_unauthorized is not None:
                on_unauthorized(response)
        elif status == 403:
            output.warning(f"Access forbidden: {response.request.method} {response.request.url}")
        elif status >= 500:
            output.warning(f"Server error {status}: {response.request.method} {response.request.url}")
        return response

    return _interceptor

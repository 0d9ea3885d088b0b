"""Asynchronous API client with caching, interceptors, deadline, and retry.

This module provides :class:`ApiClient`, the single choke point through
which every call to the padel directory backend flows.  It wraps
:class:`httpx.AsyncClient` and layers on:

- **Response caching** -- opt-in per GET call, keyed by base URL, path and
  sorted query parameters, via :class:`~padelapi.cache.ResponseCache`.
- **Interceptors** -- request and response transforms run in registration
  order via :class:`~padelapi.client.interceptors.InterceptorPipeline`.
- **Deadline** -- one timer per call around the whole retried operation;
  when it fires the in-flight request and any pending retry are cancelled.
- **Retry with backoff** -- transient failures are retried by
  :class:`~padelapi.client.retry.RetryPolicy`.
- **Typed errors** -- every failure surfaces as a
  :class:`~padelapi.exceptions.PadelApiError` subclass.

There is no module-level client instance: construct one and
hand it to the services that need it.

Example::

    async with ApiClient(ClientConfig(base_url="https://padel.example.com")) as client:
        users = await client.get("/api/users", {"page": 1}, cache=True, cache_ttl=60)
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Optional

import httpx

from padelapi.cache import ResponseCache, make_cache_key
from padelapi.cache.store import canonical_params
from padelapi.client.interceptors import (
    InterceptorPipeline,
    RequestDescriptor,
    RequestInterceptor,
    RequestOptions,
    ResponseInterceptor,
)
from padelapi.client.retry import RetryPolicy
from padelapi.exceptions import (
    DecodeError,
    HttpStatusError,
    NetworkError,
    TimeoutError_,
    error_for_status,
)
from padelapi.models import ClientConfig, ClientResponse
from padelapi.output import get_output


class ApiClient:
    """Asynchronous HTTP client for the padel directory API.

    Must be used as an async context manager (or opened with :meth:`open`
    and closed with :meth:`aclose`) so that the underlying transport is
    properly created and released.

    Args:
        config: Client settings.  Defaults to :class:`ClientConfig` defaults.
        retry_policy: Override for the policy derived from ``config.retry``,
            e.g. to plug in a different retry predicate.
        cache: Override for the per-client :class:`ResponseCache`.
        transport: Optional :mod:`httpx` transport, typically an
            :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        retry_policy: Optional[RetryPolicy] = None,
        cache: Optional[ResponseCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._retry = retry_policy or RetryPolicy.from_config(self._config.retry)
        self._cache = cache if cache is not None else ResponseCache()
        self._interceptors = InterceptorPipeline()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def open(self) -> None:
        """Create the underlying :class:`httpx.AsyncClient` if not open yet."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            )

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ApiClient:
        self.open()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # Interceptors and cache
    # ------------------------------------------------------------------ #

    def add_request_interceptor(self, interceptor: RequestInterceptor) -> None:
        """Append a request interceptor; see :class:`InterceptorPipeline`."""
        self._interceptors.add_request_interceptor(interceptor)

    def add_response_interceptor(self, interceptor: ResponseInterceptor) -> None:
        """Append a response interceptor; see :class:`InterceptorPipeline`."""
        self._interceptors.add_response_interceptor(interceptor)

    def clear_cache(self, path: Optional[str] = None) -> int:
        """Invalidate cached GET responses.

        Args:
            path: Request path whose entries (and sub-paths) are dropped,
                e.g. ``"/api/users"``.  ``None`` empties the whole cache.

        Returns:
            The number of entries removed.
        """
        prefix = None if path is None else f"{self._config.base_url}{path}"
        removed = self._cache.clear(prefix)
        get_output().debug(f"Cache cleared: {path or '*'} ({removed} entries)")
        return removed

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json_body: Any = None,
        content: Optional[str | bytes] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        cache: bool = False,
        cache_ttl: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Make an HTTP request and return the decoded response body.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            path: URL path appended to ``config.base_url``.
            params: Query parameters.  ``None`` values are dropped.
            json_body: JSON-serialisable body.
            content: Raw body.
            data: Form fields (multipart when combined with *files*).
            files: Multipart file fields.
            headers: Per-call headers, overriding the defaults.
            cache: Serve and store this GET through the response cache.
            cache_ttl: Freshness window in seconds for a cached GET.
                Defaults to ``config.cache_ttl``.
            timeout: Deadline in seconds for this call, retries included.
                Defaults to ``config.timeout``.

        Returns:
            The decoded JSON body, the text body, or ``None`` when the
            response has no content.

        Raises:
            NetworkError: No response could be obtained after all retries.
            TimeoutError_: The deadline fired, or every attempt timed out.
            HttpStatusError: Non-2xx response (:class:`AuthError`,
                :class:`NotFoundError`, :class:`ServerError` for the usual
                statuses).
            DecodeError: The body did not match its declared content type.
        """
        method = method.upper()
        cacheable = method == "GET" and cache
        key = ""
        if cacheable:
            key = make_cache_key(self._config.base_url, path, params)
            ttl = self._config.cache_ttl if cache_ttl is None else cache_ttl
            cached = self._cache.get(key, ttl)
            if cached is not None:
                get_output().debug(f"Cache hit: {method} {key}")
                return cached

        _, body = await self._perform(
            method, path, params, json_body, content, data, files, headers, timeout,
        )

        if cacheable and body is not None:
            self._cache.set(key, body)
        return body

    async def send(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> ClientResponse:
        """Like :meth:`request` but return status and headers too, bypassing the cache.

        Args:
            method: HTTP method.
            path: URL path appended to ``config.base_url``.
            **kwargs: ``params``, ``json_body``, ``content``, ``data``,
                ``files``, ``headers`` and ``timeout`` as for :meth:`request`.
        """
        response, body = await self._perform(
            method.upper(),
            path,
            kwargs.get("params"),
            kwargs.get("json_body"),
            kwargs.get("content"),
            kwargs.get("data"),
            kwargs.get("files"),
            kwargs.get("headers"),
            kwargs.get("timeout"),
        )
        return ClientResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            data=body,
        )

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        cache: bool = False,
        cache_ttl: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send a GET request, optionally served from the response cache."""
        return await self.request(
            "GET", path, params=params, headers=headers,
            cache=cache, cache_ttl=cache_ttl, timeout=timeout,
        )

    async def post(
        self,
        path: str,
        body: Any = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send a POST request with an optional JSON body."""
        return await self.request(
            "POST", path, json_body=body, headers=headers, timeout=timeout,
        )

    async def put(
        self,
        path: str,
        body: Any = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send a PUT request with an optional JSON body."""
        return await self.request(
            "PUT", path, json_body=body, headers=headers, timeout=timeout,
        )

    async def patch(
        self,
        path: str,
        body: Any = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send a PATCH request with an optional JSON body."""
        return await self.request(
            "PATCH", path, json_body=body, headers=headers, timeout=timeout,
        )

    async def delete(
        self,
        path: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers, timeout=timeout)

    async def upload(
        self,
        path: str,
        file: Any,
        extra_fields: Optional[Mapping[str, Any]] = None,
        *,
        field_name: str = "file",
        filename: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """POST *file* as a multipart form.

        No ``Content-Type`` header is sent from the defaults or *headers*;
        :mod:`httpx` sets ``multipart/form-data`` with the right boundary.

        Args:
            path: URL path appended to ``config.base_url``.
            file: Bytes, a binary file object, or an :mod:`httpx` file tuple
                ``(filename, content[, content_type])``.
            extra_fields: Additional form fields; values are sent as strings.
            field_name: Form field holding the file.
            filename: Filename to report when *file* is not already a tuple.
        """
        if filename is not None and not isinstance(file, tuple):
            file = (filename, file)
        form = {k: str(v) for k, v in extra_fields.items()} if extra_fields else None
        return await self.request(
            "POST", path, files={field_name: file}, data=form,
            headers=headers, timeout=timeout,
        )

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _perform(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        json_body: Any,
        content: Optional[str | bytes],
        data: Optional[Mapping[str, Any]],
        files: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
        timeout: Optional[float],
    ) -> tuple[httpx.Response, Any]:
        """Merge headers, run interceptors, and execute under deadline and retry."""
        options = RequestOptions(
            method=method,
            headers=self._merge_headers(
                headers, form=data is not None or files is not None, multipart=files is not None,
            ),
            params=dict(canonical_params(params)),
            json=json_body,
            content=content,
            data=dict(data) if data is not None else None,
            files=dict(files) if files is not None else None,
        )
        descriptor = RequestDescriptor(url=f"{self._config.base_url}{path}", options=options)
        descriptor = await self._interceptors.apply_request(descriptor)

        budget = self._config.timeout if timeout is None else timeout
        get_output().debug(f"{descriptor.options.method} {descriptor.url}")
        try:
            response = await asyncio.wait_for(
                self._retry.run(lambda: self._attempt(descriptor, budget)),
                timeout=budget,
            )
        except asyncio.TimeoutError:
            get_output().debug(f"Deadline of {budget:g}s exceeded: {descriptor.url}")
            raise TimeoutError_(
                f"{descriptor.options.method} {descriptor.url} timed out after {budget:g}s"
            ) from None

        return response, self._decode(response)

    async def _attempt(self, descriptor: RequestDescriptor, timeout: float) -> httpx.Response:
        """One network round trip, response interceptors, and status check.

        *timeout* is the call's whole budget, passed to :mod:`httpx` so the
        transport never gives up before the deadline around the call does.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        opts = descriptor.options
        kwargs: dict[str, Any] = {
            "method": opts.method,
            "url": descriptor.url,
            "headers": opts.headers,
            "params": opts.params,
            "timeout": timeout,
        }
        if opts.files is not None:
            kwargs["files"] = opts.files
            if opts.data is not None:
                kwargs["data"] = opts.data
        elif opts.data is not None:
            kwargs["data"] = opts.data
        elif opts.json is not None:
            kwargs["json"] = opts.json
        elif opts.content is not None:
            kwargs["content"] = opts.content

        try:
            response = await self._client.request(**kwargs)
        except httpx.TimeoutException as exc:
            raise TimeoutError_(f"{opts.method} {descriptor.url} timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"{opts.method} {descriptor.url} failed: {exc}") from exc

        response = await self._interceptors.apply_response(response)

        if not response.is_success:
            raise self._status_error(response)
        return response

    def _status_error(self, response: httpx.Response) -> HttpStatusError:
        """Build a typed error from a non-2xx response."""
        text = response.text
        try:
            body = response.json()
        except ValueError:
            body = {"message": text}
        return error_for_status(response.status_code, body)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a 2xx body according to its ``Content-Type``."""
        if not response.content:
            return None
        content_type = response.headers.get("content-type", "").lower()
        if "application/json" in content_type or "+json" in content_type:
            try:
                return response.json()
            except ValueError as exc:
                raise DecodeError(
                    f"Invalid JSON in response from {response.request.url}: {exc}",
                    content_type=content_type,
                    text=response.text[:200],
                ) from exc
        return response.text

    def _merge_headers(
        self,
        headers: Optional[Mapping[str, str]],
        form: bool = False,
        multipart: bool = False,
    ) -> dict[str, str]:
        """Per-call headers override defaults case-insensitively.

        A form body (*form*) drops the default ``Content-Type`` so that
        :mod:`httpx` labels it; a multipart body drops any ``Content-Type``,
        since only httpx knows the boundary.
        """
        merged: dict[str, str] = dict(self._config.default_headers)
        if form:
            merged = {k: v for k, v in merged.items() if k.lower() != "content-type"}
        for name, value in (headers or {}).items():
            for existing in [k for k in merged if k.lower() == name.lower()]:
                del merged[existing]
            merged[name] = value
        if multipart:
            merged = {k: v for k, v in merged.items() if k.lower() != "content-type"}
        return merged

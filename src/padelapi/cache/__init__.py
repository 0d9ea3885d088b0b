"""In-memory response caching for padelapi.

This package provides :class:`ResponseCache`, the per-client store that
memoises decoded GET bodies with a per-call TTL, and :func:`make_cache_key`,
which derives an order-independent key from base URL, path and query
parameters.

The cache is owned by :class:`~padelapi.client.ApiClient`; callers opt in per
request with ``cache=True`` and invalidate with
:meth:`~padelapi.client.ApiClient.clear_cache`.
"""

from padelapi.cache.store import CacheEntry, ResponseCache, make_cache_key

__all__ = ["CacheEntry", "ResponseCache", "make_cache_key"]

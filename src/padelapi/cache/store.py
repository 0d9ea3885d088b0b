"""In-memory response caching for GET requests.

Successful GET bodies are memoised per client in a plain ``dict`` with a
per-call time-to-live.  Expiry is lazy: a stale entry is only removed when a
later read finds it, or when :meth:`ResponseCache.clear` is called.  There
is no background eviction and no maximum size, so a long-lived client
that caches many distinct URLs grows without bound.

Cache keys are ``base_url + path`` followed by the query string built from
the *sorted* parameters, so that identical requests always resolve to the
same entry regardless of parameter ordering.  Keys stay human-readable so
that a whole resource can be invalidated by path prefix.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlencode


@dataclass
class CacheEntry:
    """A cached payload and the clock reading at which it was stored."""

    value: Any
    stored_at: float


def canonical_params(params: Optional[Mapping[str, Any]]) -> list[tuple[str, Any]]:
    """Return *params* as a key-sorted list, dropping ``None`` values.

    Sequence values are kept as-is so that :func:`urllib.parse.urlencode`
    can expand them with ``doseq=True``.
    """
    if not params:
        return []
    return sorted(
        ((str(k), v) for k, v in params.items() if v is not None),
        key=lambda item: item[0],
    )


def make_cache_key(
    base_url: str,
    path: str,
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build the cache key for a GET of *path* with *params*.

    Example::

        >>> make_cache_key("", "/api/users", {"role": "COACH", "page": 2})
        '/api/users?page=2&role=COACH'
        >>> make_cache_key("", "/api/users", {"page": 2, "role": "COACH"})
        '/api/users?page=2&role=COACH'
    """
    key = f"{base_url}{path}"
    items = canonical_params(params)
    if items:
        key = f"{key}?{urlencode(items, doseq=True)}"
    return key


class ResponseCache:
    """Memory-backed cache for decoded GET response bodies.

    Args:
        clock: Zero-argument callable returning the current time in
            seconds.  Defaults to :func:`time.monotonic`; tests pass a
            fake clock to control freshness.

    Example::

        cache = ResponseCache()
        cache.set("/api/users?page=1", {"data": []})
        cache.get("/api/users?page=1", ttl=60)   # -> {"data": []}
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str, ttl: Optional[float]) -> Optional[Any]:
        """Look up a fresh cached value.

        Args:
            key: Cache key from :func:`make_cache_key`.
            ttl: Maximum age in seconds.  An entry is fresh while
                ``now - stored_at < ttl``.  ``None`` or a non-positive value
                means the call is not a cache read and always misses.

        Returns:
            The cached value, or ``None`` on a miss.  Stale entries are
            removed as a side effect.
        """
        if not ttl or ttl <= 0:
            return None
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at < ttl:
            return entry.value
        self._entries.pop(key, None)
        return None

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any previous entry."""
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())

    def clear(self, prefix: Optional[str] = None) -> int:
        """Remove entries from the cache.

        Args:
            prefix: When ``None`` every entry is removed.  Otherwise only
                entries whose key equals *prefix* or continues it with ``/``
                or ``?`` -- so ``/api/users`` drops ``/api/users/42`` and
                ``/api/users?page=2`` but keeps ``/api/users-archive``.

        Returns:
            The number of entries removed.
        """
        if prefix is None:
            removed = len(self._entries)
            self._entries.clear()
            return removed

        doomed = [key for key in self._entries if _under_prefix(key, prefix)]
        for key in doomed:
            self._entries.pop(key, None)
        return len(doomed)

    def stats(self) -> dict[str, Any]:
        """Return cache statistics (entry count and stored keys)."""
        return {"size": len(self._entries), "keys": sorted(self._entries)}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


def _under_prefix(key: str, prefix: str) -> bool:
    if key == prefix:
        return True
    if not key.startswith(prefix):
        return False
    if prefix.endswith(("/", "?")):
        return True
    return key[len(prefix)] in "/?"

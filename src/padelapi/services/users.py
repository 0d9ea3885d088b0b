"""User directory endpoints: listing, lookup, search, stats, and mutations.

Reads that change rarely are served from the client's response cache with
per-endpoint TTLs.  Every mutation invalidates the affected user's entries
*and* the list cache, since a renamed or deleted user also changes the
pages it appeared on.
"""

from __future__ import annotations

from typing import Any, Optional

from padelapi.client import ApiClient
from padelapi.services import endpoints

USER_LIST_TTL = 2 * 60
USER_DETAIL_TTL = 5 * 60
USER_STATS_TTL = 10 * 60


class UserApiService:
    """Typed wrapper around the ``/api/users`` family of endpoints.

    Args:
        client: An open :class:`~padelapi.client.ApiClient`.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def list_users(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        role: Optional[str] = None,
        level: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Any:
        """Return one page of users matching the given filters (cached)."""
        params = {
            "page": page,
            "limit": limit,
            "role": role,
            "level": level,
            "location": location,
            "search": search,
        }
        return await self._client.get(
            endpoints.USERS, params, cache=True, cache_ttl=USER_LIST_TTL,
        )

    async def get_user(self, user_id: str) -> Any:
        """Return a single user by id (cached)."""
        return await self._client.get(
            endpoints.user_by_id(user_id), cache=True, cache_ttl=USER_DETAIL_TTL,
        )

    async def create_user(self, user_data: dict[str, Any]) -> Any:
        result = await self._client.post(endpoints.USERS, user_data)
        self._client.clear_cache(endpoints.USERS)
        return result

    async def update_user(self, user_id: str, user_data: dict[str, Any]) -> Any:
        self.clear_user_cache(user_id)
        return await self._client.put(endpoints.user_by_id(user_id), user_data)

    async def delete_user(self, user_id: str) -> Any:
        self.clear_user_cache(user_id)
        return await self._client.delete(endpoints.user_by_id(user_id))

    async def search_users(self, query: str, exclude: Optional[str] = None) -> Any:
        """Free-text search; *exclude* drops one user id (usually the caller) from results."""
        return await self._client.get(
            endpoints.USER_SEARCH, {"q": query, "exclude": exclude},
        )

    async def get_stats(self) -> Any:
        """Return directory-wide counts per role and level (cached)."""
        return await self._client.get(
            endpoints.USER_STATS, cache=True, cache_ttl=USER_STATS_TTL,
        )

    async def update_profile(self, user_id: str, profile_data: dict[str, Any]) -> Any:
        self.clear_user_cache(user_id)
        return await self._client.put(endpoints.user_profile(user_id), profile_data)

    async def upload_avatar(self, user_id: str, file: Any, filename: Optional[str] = None) -> Any:
        self.clear_user_cache(user_id)
        return await self._client.upload(
            endpoints.user_avatar(user_id), file, filename=filename,
        )

    def clear_user_cache(self, user_id: Optional[str] = None) -> None:
        """Drop cached entries for *user_id* (if given) and every cached user list.

        ``clear_cache("/api/users")`` also covers ``/api/users/<id>``, but
        the per-user call is kept explicit so the intent survives a change
        in the list path.
        """
        if user_id is not None:
            self._client.clear_cache(endpoints.user_by_id(user_id))
        self._client.clear_cache(endpoints.USERS)

"""Authentication endpoints: registration, login, logout, token refresh, passwords."""

from __future__ import annotations

from typing import Any

from padelapi.client import ApiClient
from padelapi.services import endpoints


class AuthApiService:
    """Typed wrapper around the ``/api/auth`` endpoints.

    None of these calls are cached, and none are retried on 4xx: a wrong
    password stays wrong.

    Args:
        client: An open :class:`~padelapi.client.ApiClient`.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def register(self, user_data: dict[str, Any]) -> Any:
        """Create an account; *user_data* needs at least email, password, name and role."""
        return await self._client.post(endpoints.AUTH_REGISTER, user_data)

    async def login(self, email: str, password: str) -> Any:
        return await self._client.post(
            endpoints.AUTH_LOGIN, {"email": email, "password": password},
        )

    async def logout(self) -> Any:
        return await self._client.post(endpoints.AUTH_LOGOUT)

    async def refresh_token(self) -> Any:
        return await self._client.post(endpoints.AUTH_REFRESH)

    async def reset_password(self, email: str) -> Any:
        return await self._client.post(endpoints.AUTH_RESET_PASSWORD, {"email": email})

    async def update_password(self, current_password: str, new_password: str) -> Any:
        return await self._client.put(
            endpoints.AUTH_RESET_PASSWORD,
            {"currentPassword": current_password, "newPassword": new_password},
        )

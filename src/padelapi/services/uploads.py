"""File upload endpoints."""

from __future__ import annotations

from typing import Any, Optional

from padelapi.client import ApiClient
from padelapi.services import endpoints


class UploadApiService:
    """Multipart uploads tied to a user.

    Args:
        client: An open :class:`~padelapi.client.ApiClient`.
    """

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def upload_avatar(self, file: Any, user_id: str, filename: Optional[str] = None) -> Any:
        return await self._client.upload(
            endpoints.UPLOAD_AVATAR,
            file,
            {"userId": user_id, "type": "avatar"},
            filename=filename,
        )

    async def upload_document(
        self,
        file: Any,
        user_id: str,
        document_type: str,
        filename: Optional[str] = None,
    ) -> Any:
        return await self._client.upload(
            endpoints.UPLOAD_DOCUMENT,
            file,
            {"userId": user_id, "type": document_type},
            filename=filename,
        )

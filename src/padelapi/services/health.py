"""Backend liveness check."""

from __future__ import annotations

from padelapi.client import ApiClient
from padelapi.exceptions import PadelApiError
from padelapi.output import get_output
from padelapi.services import endpoints
from padelapi.services.messages import describe_error


async def check_api_health(client: ApiClient) -> bool:
    """Return ``True`` when ``GET /api/health`` answers ``{"status": "healthy"}``.

    Client errors never escape: they are reported as a warning (the raw
    error at debug level) and the check returns ``False``.
    """
    try:
        body = await client.get(endpoints.HEALTH)
    except PadelApiError as exc:
        get_output().debug(str(exc))
        get_output().warning(f"API health check failed: {describe_error(exc)}")
        return False
    return isinstance(body, dict) and body.get("status") == "healthy"

"""Health command -- ask the backend whether it is up.

Provides ``padelapi health``.  Exits 0 when ``/api/health`` reports
``healthy`` and :data:`~padelapi.exit_codes.EXIT_GENERIC_FAILURE` otherwise,
so the command can gate deploy scripts.
"""

from __future__ import annotations

import asyncio

import typer

from padelapi.client import ApiClient, bearer_token_interceptor
from padelapi.config import resolve_client_config, resolve_token
from padelapi.exceptions import PadelApiError
from padelapi.exit_codes import EXIT_GENERIC_FAILURE
from padelapi.output import error, success
from padelapi.services import check_api_health, describe_error


def health(ctx: typer.Context) -> None:
    """Check that the API answers its health endpoint.

    Example::

        padelapi --base-url https://padel.example.com health
    """
    obj = ctx.obj or {}

    async def _go() -> bool:
        config = resolve_client_config(obj.get("base_url"), obj.get("timeout"))
        token = resolve_token(obj.get("token"))
        async with ApiClient(config) as client:
            client.add_request_interceptor(bearer_token_interceptor(lambda: token))
            return await check_api_health(client)

    try:
        healthy = asyncio.run(_go())
    except PadelApiError as exc:
        error(describe_error(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not healthy:
        error("API is not healthy")
        raise typer.Exit(code=EXIT_GENERIC_FAILURE)
    success("API is healthy")

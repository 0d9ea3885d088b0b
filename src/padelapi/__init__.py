"""padelapi -- resilient async client for the padel user directory API.

The package wraps :mod:`httpx` in a single :class:`~padelapi.client.ApiClient`
that adds an opt-in response cache, a request/response interceptor pipeline,
a per-call deadline and retry with exponential backoff, and surfaces every
failure as a typed :class:`~padelapi.exceptions.PadelApiError`.

Typical use::

    from padelapi.client import ApiClient
    from padelapi.models import ClientConfig
    from padelapi.services import UserApiService

    async with ApiClient(ClientConfig(base_url="https://padel.example.com")) as client:
        coaches = await UserApiService(client).list_users(role="COACH")

Modules:
    app: Typer application and CLI entry point.
    client: Request executor, retry policy and interceptors.
    cache: In-memory response cache.
    services: Endpoint services, error messages and batch helper.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"

"""User commands -- query the padel user directory from the shell.

Provides the ``padelapi users`` sub-command group.  Every command builds an
:class:`~padelapi.client.ApiClient` from the resolved configuration, attaches
the bearer-token and status-logging interceptors, runs one
:class:`~padelapi.services.UserApiService` call, and renders the result.

Client errors are reported with
:func:`~padelapi.services.describe_error` and end the process with the
error's exit code.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

import typer

from padelapi.client import ApiClient, bearer_token_interceptor, status_logging_interceptor
from padelapi.config import resolve_client_config, resolve_token
from padelapi.exceptions import PadelApiError
from padelapi.output import OutputFormat, debug, error, format_response, get_output, print_table
from padelapi.services import UserApiService, describe_error

users_app = typer.Typer(no_args_is_help=True)

_USER_COLUMNS = ["id", "name", "email", "role", "level", "location"]


def _run(ctx: typer.Context, call: Callable[[UserApiService], Awaitable[Any]]) -> Any:
    """Execute *call* against a freshly opened client, mapping errors to exit codes."""
    obj = ctx.obj or {}

    async def _go() -> Any:
        config = resolve_client_config(obj.get("base_url"), obj.get("timeout"))
        token = resolve_token(obj.get("token"))
        async with ApiClient(config) as client:
            client.add_request_interceptor(bearer_token_interceptor(lambda: token))
            client.add_response_interceptor(status_logging_interceptor())
            return await call(UserApiService(client))

    try:
        return asyncio.run(_go())
    except PadelApiError as exc:
        debug(str(exc))
        error(describe_error(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _user_rows(result: Any) -> Optional[list[dict[str, Any]]]:
    """Pull the list of user dicts out of a list-shaped response, if any."""
    items = result
    if isinstance(result, dict):
        items = result.get("users", result.get("data"))
    if isinstance(items, list) and all(isinstance(item, dict) for item in items):
        return items
    return None


def _render_users(result: Any, title: str) -> None:
    rows = _user_rows(result)
    if rows is None or get_output().format == OutputFormat.JSON:
        format_response(result)
        return
    print_table(
        _USER_COLUMNS,
        [[str(row.get(col, "") or "") for col in _USER_COLUMNS] for row in rows],
        title=title,
    )


@users_app.command("list")
def users_list(
    ctx: typer.Context,
    page: Optional[int] = typer.Option(None, "--page", help="Page number (1-based)."),
    limit: Optional[int] = typer.Option(None, "--limit", help="Users per page."),
    role: Optional[str] = typer.Option(None, "--role", help="PLAYER or COACH."),
    level: Optional[str] = typer.Option(None, "--level", help="Playing level filter."),
    location: Optional[str] = typer.Option(None, "--location", help="City or club filter."),
    search: Optional[str] = typer.Option(None, "--search", help="Name or email substring."),
) -> None:
    """List users, optionally filtered.

    Example::

        padelapi users list --role COACH --page 2
    """
    result = _run(
        ctx,
        lambda users: users.list_users(
            page=page, limit=limit, role=role, level=level,
            location=location, search=search,
        ),
    )
    _render_users(result, title="Users")


@users_app.command("get")
def users_get(
    ctx: typer.Context,
    user_id: str = typer.Argument(help="User id."),
) -> None:
    """Show a single user."""
    result = _run(ctx, lambda users: users.get_user(user_id))
    format_response(result)


@users_app.command("search")
def users_search(
    ctx: typer.Context,
    query: str = typer.Argument(help="Free-text query."),
    exclude: Optional[str] = typer.Option(None, "--exclude", help="User id to leave out."),
) -> None:
    """Search users by name or email."""
    result = _run(ctx, lambda users: users.search_users(query, exclude=exclude))
    _render_users(result, title=f"Search: {query}")


@users_app.command("stats")
def users_stats(ctx: typer.Context) -> None:
    """Show directory-wide user counts."""
    result = _run(ctx, lambda users: users.get_stats())
    format_response(result)

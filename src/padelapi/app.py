"""Typer application and CLI entry point for padelapi.

This module wires together the top-level Typer application and registers
the built-in sub-commands (``users``, ``config``, ``health``).  The :func:`main`
function is the console-script entry point declared in ``pyproject.toml``.

See Also:
    :mod:`padelapi.config`: Client configuration resolution.
    :mod:`padelapi.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

import typer

from padelapi import __version__
from padelapi.commands.config import config_app
from padelapi.commands.health import health
from padelapi.commands.users import users_app
from padelapi.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="padelapi",
    help="Query the padel user directory API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(users_app, name="users", help="Browse and search directory users.")
app.add_typer(config_app, name="config", help="Configuration management.")
app.command("health", help="Check that the API is up.")(health)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"padelapi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="API base URL (overrides config and env)."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Per-call deadline in seconds."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="Bearer token (default: $PADELAPI_TOKEN)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~padelapi.output.OutputManager` from
    CLI flags and stores connection overrides in ``ctx.obj`` for the
    sub-commands.
    """
    from padelapi.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["timeout"] = timeout
    ctx.obj["token"] = token
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``padelapi`` console script.

    Unhandled :class:`~padelapi.exceptions.PadelApiError` instances cause a
    clean exit with the error's ``exit_code``; anything else exits with
    :data:`~padelapi.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from padelapi.exceptions import PadelApiError
        from padelapi.output import error

        if isinstance(exc, PadelApiError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)

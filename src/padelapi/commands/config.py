"""Config commands -- view and modify global configuration.

Provides the ``padelapi config`` sub-command group for reading, updating,
and resetting the user's global configuration file
(:class:`~padelapi.models.GlobalConfig`).
"""

from __future__ import annotations

import typer

from padelapi.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show current configuration.

    Example::

        padelapi config show
        padelapi --json config show
    """
    from padelapi.config import get_config_dir, load_global_config

    config = load_global_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set-url")
def config_set_url(
    url: str = typer.Argument(help="Base URL of the padel directory API."),
) -> None:
    """Store the API base URL.

    Example::

        padelapi config set-url https://padel.example.com
    """
    from padelapi.config import load_global_config, save_global_config

    if not url.startswith(("http://", "https://")):
        error(f"Base URL must start with http:// or https://, got: {url}")
        raise typer.Exit(code=2)

    config = load_global_config()
    save_global_config(config.model_copy(update={"base_url": url.rstrip("/")}))
    success(f"Set base_url = {url.rstrip('/')}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'retry.max_attempts')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    The value is coerced to match the existing field's type (bool, int,
    float, or str) and the result is validated before saving.

    Example::

        padelapi config set timeout 10
        padelapi config set retry.max_attempts 5
        padelapi config set output.format json
    """
    from padelapi.config import load_global_config, save_global_config
    from padelapi.models import GlobalConfig

    config = load_global_config()
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=2)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)

    current = target[final_key]
    coerced: object
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, (int, float)):
        try:
            coerced = type(current)(value)
        except ValueError:
            error(f"Expected {type(current).__name__} for {key}, got: {value}")
            raise typer.Exit(code=2) from None
    else:
        coerced = value

    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults."""
    from padelapi.config import save_global_config
    from padelapi.models import GlobalConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")

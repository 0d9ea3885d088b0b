"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles persistent configuration for the ``padelapi`` command:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.padelapi/`` on macOS and Windows. See :func:`get_config_dir`.
* **Global config** -- A single :class:`~padelapi.models.GlobalConfig`
  JSON file storing the API base URL, timeouts, retry and cache settings.
* **Precedence resolution** -- :func:`resolve_client_config` merges CLI
  flags, environment variables, and the global config into the
  :class:`~padelapi.models.ClientConfig` handed to the client.

File writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from padelapi.exceptions import ConfigError
from padelapi.models import ClientConfig, GlobalConfig

_APP_NAME = "padelapi"
_CONFIG_FILENAME = "config.json"

ENV_BASE_URL = "PADELAPI_BASE_URL"
ENV_TIMEOUT = "PADELAPI_TIMEOUT"
ENV_TOKEN = "PADELAPI_TOKEN"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/padelapi/`` (default ``~/.config/padelapi/``).
    On macOS/Windows: ``~/.padelapi/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~padelapi.models.GlobalConfig`, or a
        default instance if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def _env_timeout() -> Optional[float]:
    raw = os.environ.get(ENV_TIMEOUT)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_TIMEOUT} must be a number of seconds, got {raw!r}") from exc


def resolve_client_config(
    cli_base_url: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    global_config: Optional[GlobalConfig] = None,
) -> ClientConfig:
    """Build the effective :class:`~padelapi.models.ClientConfig`.

    Precedence (high to low):
        1. CLI flags (``cli_base_url``, ``cli_timeout``)
        2. Environment variables (``PADELAPI_BASE_URL``, ``PADELAPI_TIMEOUT``)
        3. User config (``~/.config/padelapi/config.json``)
        4. Defaults

    Raises:
        ConfigError: If the config file or an environment value is invalid.
    """
    cfg = global_config if global_config is not None else load_global_config()

    base_url = cfg.base_url
    env_base_url = os.environ.get(ENV_BASE_URL)
    if env_base_url:
        base_url = env_base_url
    if cli_base_url is not None:
        base_url = cli_base_url

    timeout = cfg.timeout
    env_timeout = _env_timeout()
    if env_timeout is not None:
        timeout = env_timeout
    if cli_timeout is not None:
        timeout = cli_timeout

    try:
        return ClientConfig(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            retry=cfg.retry,
            cache_ttl=cfg.cache_ttl,
            verify_ssl=cfg.verify_ssl,
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc


def resolve_token(cli_token: Optional[str] = None) -> Optional[str]:
    """Return the bearer token from the ``--token`` flag or ``PADELAPI_TOKEN``."""
    if cli_token:
        return cli_token
    return os.environ.get(ENV_TOKEN) or None

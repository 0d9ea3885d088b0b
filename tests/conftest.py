"""Shared test fixtures for padelapi.

Provides fixtures for isolating the configuration directory, managing the
global output state, building clients on top of :class:`httpx.MockTransport`,
and running CLI commands.  These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from padelapi.client import ApiClient, RetryPolicy
from padelapi.models import ClientConfig
from padelapi.output import OutputFormat, OutputManager, reset_output, set_output


BASE_URL = "https://padel.test"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME to a subdirectory of tmp_path so that tests never
    touch real user config, forces the XDG layout on every platform, clears
    all PADELAPI_* environment variables and changes the working directory
    to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setattr("padelapi.config._is_xdg_platform", lambda: True)

    for var in ["PADELAPI_BASE_URL", "PADELAPI_TIMEOUT", "PADELAPI_TOKEN"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a PLAIN-format, verbose OutputManager so debug lines reach stderr."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


class RecordingSleep:
    """Stand-in for :func:`asyncio.sleep` that records delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(recording_sleep: RecordingSleep) -> Callable[..., ApiClient]:
    """Factory for an :class:`ApiClient` talking to a mock transport.

    The retry policy uses :class:`RecordingSleep`, so retried calls never
    actually wait.  Extra keyword arguments go to :class:`ClientConfig`,
    except ``cache`` and ``max_attempts``.
    """

    def _factory(
        handler: Callable[[httpx.Request], Any],
        *,
        max_attempts: int = 3,
        cache: Any = None,
        **config: Any,
    ) -> ApiClient:
        config.setdefault("base_url", BASE_URL)
        return ApiClient(
            ClientConfig(**config),
            retry_policy=RetryPolicy(max_attempts=max_attempts, sleep=recording_sleep),
            cache=cache,
            transport=httpx.MockTransport(handler),
        )

    return _factory

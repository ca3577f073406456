"""Shared test fixtures for lfcli.

Provides isolated config environments, a resolved test configuration,
helpers for building :class:`httpx.MockTransport` servers, and output
state management. These fixtures are discovered automatically by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from lfcli.models import Config
from lfcli.output import OutputManager, reset_output, set_output

TEST_HOST = "https://langfuse.test"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a colourless, quiet output manager."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    return output


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of
    tmp_path, clears every LANGFUSE_* variable and changes the working
    directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("lfcli.config._is_xdg_platform", lambda: True)

    for var in [
        "LANGFUSE_PROFILE",
        "LANGFUSE_PUBLIC_KEY",
        "LANGFUSE_SECRET_KEY",
        "LANGFUSE_HOST",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config() -> Config:
    """A complete configuration pointing at the test host."""
    return Config(public_key="pk-lf-test", secret_key="sk-lf-test", host=TEST_HOST)


# ---------------------------------------------------------------------------
# Mock server helpers
# ---------------------------------------------------------------------------


class RecordingServer:
    """Wrap a request handler and remember every request it received."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def _page(data: list[Any], page_no: int = 1, total_pages: int | None = None) -> dict[str, Any]:
    """Build a list-endpoint payload."""
    body: dict[str, Any] = {"data": data}
    if total_pages is not None:
        body["meta"] = {
            "page": page_no,
            "limit": len(data),
            "totalItems": len(data),
            "totalPages": total_pages,
        }
    return body


@pytest.fixture
def page_payload() -> Callable[..., dict[str, Any]]:
    """Builder for list-endpoint payloads: ``page_payload(data, page_no, total_pages)``."""
    return _page


@pytest.fixture
def make_server() -> Callable[..., RecordingServer]:
    """Factory for :class:`RecordingServer` instances."""
    return RecordingServer

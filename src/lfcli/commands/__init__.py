"""Built-in CLI sub-commands for lfcli.

Each module exports a :class:`typer.Typer` sub-application registered on the
root app in :mod:`lfcli.app`:

* :mod:`~lfcli.commands.config` -- manage credential profiles.
* :mod:`~lfcli.commands.traces`, :mod:`~lfcli.commands.sessions`,
  :mod:`~lfcli.commands.observations`, :mod:`~lfcli.commands.scores`,
  :mod:`~lfcli.commands.metrics`, :mod:`~lfcli.commands.prompts`,
  :mod:`~lfcli.commands.datasets` -- one group per API resource.

The helpers below are the glue every resource command shares: resolve the
configuration from the root options, open a client, and render the result.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from lfcli.client import LangfuseClient
from lfcli.config import resolve_config
from lfcli.exceptions import ConfigurationError, InvalidUsageError
from lfcli.formatters import OutputFormat, format_output
from lfcli.models import Config
from lfcli.output import emit

MISSING_CREDENTIALS = "Missing credentials. Run 'lf config setup' or set environment variables."


def _options(ctx: typer.Context) -> dict[str, Any]:
    return ctx.obj if isinstance(ctx.obj, dict) else {}


def get_config(ctx: typer.Context) -> Config:
    """Resolve the configuration from the root ``--profile``/key/host options."""
    opts = _options(ctx)
    return resolve_config(
        profile=opts.get("profile"),
        public_key=opts.get("public_key"),
        secret_key=opts.get("secret_key"),
        host=opts.get("host"),
    )


def open_client(ctx: typer.Context) -> LangfuseClient:
    """Build a client for the current invocation.

    Raises:
        ConfigurationError: If either key is missing after resolution.
    """
    config = get_config(ctx)
    if not config.is_valid():
        raise ConfigurationError(MISSING_CREDENTIALS)
    return LangfuseClient(config)


def render(
    ctx: typer.Context,
    data: Any,
    default_format: OutputFormat = OutputFormat.TABLE,
) -> None:
    """Format *data* with ``--format`` (or *default_format*) and emit it."""
    fmt = _options(ctx).get("format") or default_format
    emit(format_output(data, fmt))


def parse_json_option(value: Optional[str], option: str) -> Any:
    """Decode a JSON-valued option, returning ``None`` when it was not given.

    Raises:
        InvalidUsageError: If *value* is not valid JSON.
    """
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise InvalidUsageError(f"Invalid JSON for {option}: {exc}") from exc


def read_content(file: Optional[Path]) -> str:
    """Return the contents of *file*, or all of stdin when no file is given."""
    if file is None:
        return sys.stdin.read()
    try:
        return file.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidUsageError(f"Cannot read {file}: {exc}") from exc

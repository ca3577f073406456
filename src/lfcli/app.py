"""Typer application and CLI entry point for lfcli.

This module wires together the top-level Typer application and registers the
built-in sub-command groups (``config``, ``traces``, ``sessions``,
``observations``, ``scores``, ``metrics``, ``prompts``, ``datasets``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It loads a ``.env`` file from the working directory,
installs signal handlers and invokes the Typer app. :class:`LfcliError`
instances become a one-line ``Error:`` message and the error's exit code;
anything else is written to a crash log under the data directory.

See Also:
    :mod:`lfcli.config`: Profile storage and credential resolution.
    :mod:`lfcli.output`: Output manager initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from lfcli import __version__
from lfcli.commands.config import config_app
from lfcli.commands.datasets import datasets_app
from lfcli.commands.metrics import metrics_app
from lfcli.commands.observations import observations_app
from lfcli.commands.prompts import prompts_app
from lfcli.commands.scores import scores_app
from lfcli.commands.sessions import sessions_app
from lfcli.commands.traces import traces_app
from lfcli.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="lf",
    help="Command-line interface for the Langfuse LLM observability platform.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config", help="Manage configuration profiles.")
app.add_typer(traces_app, name="traces", help="Query traces.")
app.add_typer(sessions_app, name="sessions", help="Query sessions.")
app.add_typer(observations_app, name="observations", help="Query observations.")
app.add_typer(scores_app, name="scores", help="Query and create scores.")
app.add_typer(metrics_app, name="metrics", help="Query aggregated metrics.")
app.add_typer(prompts_app, name="prompts", help="Manage prompts.")
app.add_typer(datasets_app, name="datasets", help="Manage evaluation datasets.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"lf {__version__}")
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
    profile: Optional[str] = typer.Option(
        None, "--profile", help="Profile name to use."
    ),
    public_key: Optional[str] = typer.Option(
        None, "--public-key", help="Langfuse public key."
    ),
    secret_key: Optional[str] = typer.Option(
        None, "--secret-key", help="Langfuse secret key."
    ),
    host: Optional[str] = typer.Option(
        None, "--host", help="Langfuse host URL."
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, csv or markdown."
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write output to this file instead of stdout."
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

    Initialises the global :class:`~lfcli.output.OutputManager` from CLI
    flags and stores the shared options in ``ctx.obj`` for sub-commands.
    An unknown ``--format`` is rejected here, before any request is made.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        profile: Profile name override (highest precedence).
        public_key: Public key override.
        secret_key: Secret key override.
        host: Host URL override.
        output_format: Output format; each command has its own default.
        output_file: Redirect rendered data to a file path.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
    """
    from lfcli.formatters import OutputFormat
    from lfcli.output import OutputManager, set_output

    set_output(
        OutputManager(
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["public_key"] = public_key
    ctx.obj["secret_key"] = secret_key
    ctx.obj["host"] = host
    ctx.obj["format"] = OutputFormat.parse(output_format) if output_format else None
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from lfcli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``lf`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    from lfcli.config import load_env_file

    _setup_signal_handlers()
    try:
        load_env_file()
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from lfcli.exceptions import LfcliError
        from lfcli.output import error

        if isinstance(exc, LfcliError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)

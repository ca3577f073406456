"""Trace commands -- list and fetch traces.

Provides the ``lf traces`` sub-command group.
"""

from __future__ import annotations

from typing import List, Optional

import typer

from lfcli.commands import open_client, render

traces_app = typer.Typer(no_args_is_help=True)

OBSERVATIONS_PER_TRACE = 100


@traces_app.command("list")
def traces_list(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Filter by trace name."),
    user_id: Optional[str] = typer.Option(None, "--user-id", "-u", help="Filter by user ID."),
    session_id: Optional[str] = typer.Option(
        None, "--session-id", "-s", help="Filter by session ID."
    ),
    tags: Optional[List[str]] = typer.Option(
        None, "--tag", "-t", help="Filter by tag (repeatable)."
    ),
    from_timestamp: Optional[str] = typer.Option(
        None, "--from", help="Only traces at or after this ISO 8601 timestamp."
    ),
    to_timestamp: Optional[str] = typer.Option(
        None, "--to", help="Only traces before this ISO 8601 timestamp."
    ),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List traces with optional filters.

    Example::

        lf traces list --user-id u-42 --tag prod --tag eu --limit 200
    """
    with open_client(ctx) as client:
        traces = client.list_traces(
            name=name,
            user_id=user_id,
            session_id=session_id,
            tags=tags,
            from_timestamp=from_timestamp,
            to_timestamp=to_timestamp,
            limit=limit,
            page=page,
        )
    render(ctx, traces)


@traces_app.command("get")
def traces_get(
    ctx: typer.Context,
    trace_id: str = typer.Argument(help="Trace ID."),
    with_observations: bool = typer.Option(
        False, "--with-observations", help="Attach the trace's observations."
    ),
) -> None:
    """Get a single trace by ID.

    With ``--with-observations`` up to 100 observations of the trace are
    fetched and placed under the ``observations`` key.
    """
    with open_client(ctx) as client:
        trace = client.get_trace(trace_id)
        if with_observations:
            trace["observations"] = client.list_observations(
                trace_id=trace_id, limit=OBSERVATIONS_PER_TRACE,
            )
    render(ctx, trace)

"""Session commands -- list sessions and show one with its traces."""

from __future__ import annotations

from typing import Optional

import typer

from lfcli.commands import open_client, render

sessions_app = typer.Typer(no_args_is_help=True)

TRACES_PER_SESSION = 100


@sessions_app.command("list")
def sessions_list(
    ctx: typer.Context,
    from_timestamp: Optional[str] = typer.Option(
        None, "--from", help="Only sessions created at or after this ISO 8601 timestamp."
    ),
    to_timestamp: Optional[str] = typer.Option(
        None, "--to", help="Only sessions created before this ISO 8601 timestamp."
    ),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List sessions."""
    with open_client(ctx) as client:
        sessions = client.list_sessions(
            from_timestamp=from_timestamp,
            to_timestamp=to_timestamp,
            limit=limit,
            page=page,
        )
    render(ctx, sessions)


@sessions_app.command("show")
def sessions_show(
    ctx: typer.Context,
    session_id: str = typer.Argument(help="Session ID."),
    with_traces: bool = typer.Option(
        False, "--with-traces", help="Attach the session's traces."
    ),
) -> None:
    """Show a session.

    With ``--with-traces`` up to 100 traces of the session are fetched and
    placed under the ``traces`` key.
    """
    with open_client(ctx) as client:
        session = client.get_session(session_id)
        if with_traces:
            session["traces"] = client.list_traces(
                session_id=session_id, limit=TRACES_PER_SESSION,
            )
    render(ctx, session)

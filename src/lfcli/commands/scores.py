"""Score commands -- list, fetch and create evaluation scores."""

from __future__ import annotations

from typing import Optional, Union

import typer

from lfcli.commands import open_client, render
from lfcli.formatters import OutputFormat
from lfcli.models import ScoreCreate, ScoreDataType

scores_app = typer.Typer(no_args_is_help=True)


def _score_value(raw: str) -> Union[float, str]:
    """Numeric values are sent as numbers, anything else as a category."""
    try:
        return float(raw)
    except ValueError:
        return raw


@scores_app.command("list")
def scores_list(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Filter by score name."),
    from_timestamp: Optional[str] = typer.Option(
        None, "--from", help="Only scores at or after this ISO 8601 timestamp."
    ),
    to_timestamp: Optional[str] = typer.Option(
        None, "--to", help="Only scores before this ISO 8601 timestamp."
    ),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List scores."""
    with open_client(ctx) as client:
        scores = client.list_scores(
            name=name,
            from_timestamp=from_timestamp,
            to_timestamp=to_timestamp,
            limit=limit,
            page=page,
        )
    render(ctx, scores)


@scores_app.command("get")
def scores_get(
    ctx: typer.Context,
    score_id: str = typer.Argument(help="Score ID."),
) -> None:
    """Get a single score by ID."""
    with open_client(ctx) as client:
        score = client.get_score(score_id)
    render(ctx, score)


@scores_app.command("create")
def scores_create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", "-n", help="Score name."),
    value: str = typer.Option(..., "--value", help="Numeric value, or a category label."),
    trace_id: Optional[str] = typer.Option(None, "--trace-id", help="Trace to attach to."),
    observation_id: Optional[str] = typer.Option(
        None, "--observation-id", help="Observation to attach to."
    ),
    session_id: Optional[str] = typer.Option(
        None, "--session-id", help="Session to attach to."
    ),
    data_type: Optional[ScoreDataType] = typer.Option(
        None, "--data-type", case_sensitive=False, help="Score data type."
    ),
    comment: Optional[str] = typer.Option(None, "--comment", "-c", help="Free-text comment."),
) -> None:
    """Create a score.

    Prints the created score as JSON unless ``--format`` says otherwise.

    Example::

        lf scores create --name accuracy --value 0.92 --trace-id tr-1
    """
    score = ScoreCreate(
        name=name,
        value=_score_value(value),
        trace_id=trace_id,
        observation_id=observation_id,
        session_id=session_id,
        data_type=data_type.value if data_type else None,
        comment=comment,
    )
    with open_client(ctx) as client:
        created = client.create_score(score)
    render(ctx, created, default_format=OutputFormat.JSON)

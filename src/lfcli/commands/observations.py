"""Observation commands -- list and fetch spans, generations and events."""

from __future__ import annotations

from typing import Optional

import typer

from lfcli.commands import open_client, render
from lfcli.models import ObservationType

observations_app = typer.Typer(no_args_is_help=True)


@observations_app.command("list")
def observations_list(
    ctx: typer.Context,
    trace_id: Optional[str] = typer.Option(None, "--trace-id", help="Filter by trace ID."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Filter by name."),
    observation_type: Optional[ObservationType] = typer.Option(
        None, "--type", case_sensitive=False, help="Filter by observation type."
    ),
    user_id: Optional[str] = typer.Option(None, "--user-id", "-u", help="Filter by user ID."),
    from_start_time: Optional[str] = typer.Option(
        None, "--from", help="Only observations starting at or after this ISO 8601 timestamp."
    ),
    to_start_time: Optional[str] = typer.Option(
        None, "--to", help="Only observations starting before this ISO 8601 timestamp."
    ),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List observations.

    Example::

        lf observations list --trace-id tr-1 --type generation -f csv
    """
    with open_client(ctx) as client:
        observations = client.list_observations(
            trace_id=trace_id,
            name=name,
            observation_type=observation_type.value if observation_type else None,
            user_id=user_id,
            from_start_time=from_start_time,
            to_start_time=to_start_time,
            limit=limit,
            page=page,
        )
    render(ctx, observations)


@observations_app.command("get")
def observations_get(
    ctx: typer.Context,
    observation_id: str = typer.Argument(help="Observation ID."),
) -> None:
    """Get a single observation by ID."""
    with open_client(ctx) as client:
        observation = client.get_observation(observation_id)
    render(ctx, observation)

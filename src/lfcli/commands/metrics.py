"""Metrics command -- aggregate queries over traces and observations."""

from __future__ import annotations

from typing import List, Optional

import typer

from lfcli.commands import open_client, render
from lfcli.models import Aggregation, Measure, MetricsQuery, MetricsView, TimeGranularity

metrics_app = typer.Typer(no_args_is_help=True)


@metrics_app.command("query")
def metrics_query(
    ctx: typer.Context,
    view: MetricsView = typer.Option(..., "--view", help="Data set to aggregate."),
    measure: Measure = typer.Option(..., "--measure", help="Quantity to measure."),
    aggregation: Aggregation = typer.Option(..., "--aggregation", help="Aggregation function."),
    dimensions: Optional[List[str]] = typer.Option(
        None, "--dimension", "-d", help="Group by this field (repeatable)."
    ),
    from_timestamp: Optional[str] = typer.Option(
        None, "--from", help="Start of the time range (ISO 8601)."
    ),
    to_timestamp: Optional[str] = typer.Option(
        None, "--to", help="End of the time range (ISO 8601)."
    ),
    granularity: Optional[TimeGranularity] = typer.Option(
        None, "--granularity", help="Time bucket size."
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum number of rows."),
) -> None:
    """Run a metrics query.

    Example::

        lf metrics query --view traces --measure totalCost --aggregation sum \\
            --dimension name --from 2024-01-01T00:00:00Z
    """
    query = MetricsQuery(
        view=view.value,
        measure=measure.value,
        aggregation=aggregation.value,
        dimensions=dimensions or None,
        from_timestamp=from_timestamp,
        to_timestamp=to_timestamp,
        granularity=granularity.value if granularity else None,
        limit=limit,
    )
    with open_client(ctx) as client:
        rows = client.query_metrics(query)
    render(ctx, rows)

"""Dataset commands -- evaluation datasets, their items and runs."""

from __future__ import annotations

from typing import Optional

import typer

from lfcli.commands import open_client, parse_json_option, render
from lfcli.models import DatasetCreate, DatasetItemCreate

datasets_app = typer.Typer(no_args_is_help=True)


@datasets_app.command("list")
def datasets_list(
    ctx: typer.Context,
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List datasets."""
    with open_client(ctx) as client:
        datasets = client.list_datasets(limit=limit, page=page)
    render(ctx, datasets)


@datasets_app.command("get")
def datasets_get(
    ctx: typer.Context,
    name: str = typer.Argument(help="Dataset name."),
) -> None:
    """Get a dataset by name."""
    with open_client(ctx) as client:
        dataset = client.get_dataset(name)
    render(ctx, dataset)


@datasets_app.command("create")
def datasets_create(
    ctx: typer.Context,
    name: str = typer.Argument(help="Dataset name."),
    description: Optional[str] = typer.Option(None, "--description", help="Description."),
    metadata: Optional[str] = typer.Option(None, "--metadata", help="Metadata as JSON."),
) -> None:
    """Create a dataset."""
    dataset = DatasetCreate(
        name=name,
        description=description,
        metadata=parse_json_option(metadata, "--metadata"),
    )
    with open_client(ctx) as client:
        created = client.create_dataset(dataset)
    render(ctx, created)


@datasets_app.command("items")
def datasets_items(
    ctx: typer.Context,
    dataset: Optional[str] = typer.Option(None, "--dataset", help="Only items of this dataset."),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List dataset items."""
    with open_client(ctx) as client:
        items = client.list_dataset_items(dataset_name=dataset, limit=limit, page=page)
    render(ctx, items)


@datasets_app.command("item-get")
def datasets_item_get(
    ctx: typer.Context,
    item_id: str = typer.Argument(help="Dataset item ID."),
) -> None:
    """Get a dataset item by ID."""
    with open_client(ctx) as client:
        item = client.get_dataset_item(item_id)
    render(ctx, item)


@datasets_app.command("item-create")
def datasets_item_create(
    ctx: typer.Context,
    dataset: str = typer.Option(..., "--dataset", help="Dataset to add the item to."),
    input_json: str = typer.Option(..., "--input", help="Item input as JSON."),
    expected_output: Optional[str] = typer.Option(
        None, "--expected-output", help="Expected output as JSON."
    ),
    metadata: Optional[str] = typer.Option(None, "--metadata", help="Metadata as JSON."),
    source_trace_id: Optional[str] = typer.Option(
        None, "--source-trace-id", help="Trace the item was derived from."
    ),
    source_observation_id: Optional[str] = typer.Option(
        None, "--source-observation-id", help="Observation the item was derived from."
    ),
) -> None:
    """Add an item to a dataset.

    Example::

        lf datasets item-create --dataset qa --input '{"q": "2+2"}' --expected-output '"4"'
    """
    item = DatasetItemCreate(
        dataset_name=dataset,
        input=parse_json_option(input_json, "--input"),
        expected_output=parse_json_option(expected_output, "--expected-output"),
        metadata=parse_json_option(metadata, "--metadata"),
        source_trace_id=source_trace_id,
        source_observation_id=source_observation_id,
    )
    with open_client(ctx) as client:
        created = client.create_dataset_item(item)
    render(ctx, created)


@datasets_app.command("runs")
def datasets_runs(
    ctx: typer.Context,
    name: str = typer.Argument(help="Dataset name."),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum number of results."),
    page: int = typer.Option(1, "--page", help="Page to start from."),
) -> None:
    """List the runs of a dataset."""
    with open_client(ctx) as client:
        runs = client.list_dataset_runs(name, limit=limit, page=page)
    render(ctx, runs)


@datasets_app.command("run-get")
def datasets_run_get(
    ctx: typer.Context,
    name: str = typer.Argument(help="Dataset name."),
    run: str = typer.Argument(help="Run name."),
) -> None:
    """Get one run of a dataset."""
    with open_client(ctx) as client:
        dataset_run = client.get_dataset_run(name, run)
    render(ctx, dataset_run)

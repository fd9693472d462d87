# sqlpool CLI: main entry point
"""sqlpool CLI: drive the elastic pool adapter from the terminal."""

from __future__ import annotations

import json
from pathlib import Path

import click
from azure.core.exceptions import HttpResponseError

from ..common import console, die, init_logging, print_success, print_warning
from ..config import settings
from ..providers.azure.auth import AzureClients
from ..providers.azure.elastic_pool import RESOURCE_TYPE
from ..providers.base import ResourceAdapter, ResourceData
from ..providers.errors import AdapterError
from ..services.registry import build_registry


@click.group()
@click.version_option(version=settings.app_version, prog_name="sqlpool")
@click.option("--debug", is_flag=True, default=settings.debug, help="Log at DEBUG level.")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for log files (default: local/logs).",
)
def cli(debug: bool, log_dir: Path | None) -> None:
    """sqlpool: declarative Azure SQL elastic pools."""
    init_logging(log_dir=log_dir, debug=debug)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _adapter() -> ResourceAdapter:
    return build_registry().get(RESOURCE_TYPE)


def _clients() -> AzureClients:
    try:
        return AzureClients.from_settings(settings)
    except ValueError as e:
        die(str(e))


def _parse_tags(tags: tuple[str, ...]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for item in tags:
        if "=" not in item:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--tag")
        k, v = item.split("=", 1)
        parsed[k.strip()] = v.strip()
    return parsed


def _run(operation, data: ResourceData, clients: AzureClients) -> None:
    """Run one adapter operation, turning adapter and API failures into a clean exit."""
    try:
        operation(data, clients)
    except AdapterError as e:
        die(str(e))
    except HttpResponseError as e:
        die(f"Azure API error: {e.message}")


def _print_state(data: ResourceData) -> None:
    click.echo(json.dumps(data.as_dict(), indent=2, sort_keys=True))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@cli.command()
def schema() -> None:
    """Show the elastic pool fields."""
    from rich.table import Table

    resource_schema = _adapter().schema()
    table = Table(title=resource_schema.resource_type)
    table.add_column("Field", style="cyan")
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Computed")
    table.add_column("ForceNew")
    table.add_column("Description", style="dim")
    for name, f in resource_schema.fields.items():
        table.add_row(
            name, f.type,
            "✔" if f.required else "",
            "✔" if f.computed else "",
            "✔" if f.force_new else "",
            f.description,
        )
    console.print(table)


@cli.command()
@click.option("--id", "resource_id", default="", help="ID of an existing pool to update in place.")
@click.option("--name", required=True, help="Elastic pool name")
@click.option("--server", "server_name", required=True, help="SQL server name")
@click.option("--resource-group", "resource_group_name", required=True, help="Resource group name")
@click.option("--location", required=True, help="Azure region, e.g. westus")
@click.option("--edition", required=True, help="Basic, Standard or Premium")
@click.option("--dtu", type=int, required=True, help="Pool capacity in eDTUs")
@click.option("--db-dtu-min", type=int, default=None, help="Minimum eDTUs per database")
@click.option("--db-dtu-max", type=int, default=None, help="Maximum eDTUs per database")
@click.option("--pool-size", type=int, default=None, help="Storage limit in MB")
@click.option("--tag", "tags", multiple=True, help="Tag as KEY=VALUE (repeatable)")
def apply(
    resource_id: str,
    name: str,
    server_name: str,
    resource_group_name: str,
    location: str,
    edition: str,
    dtu: int,
    db_dtu_min: int | None,
    db_dtu_max: int | None,
    pool_size: int | None,
    tags: tuple[str, ...],
) -> None:
    """Create an elastic pool, or update it when --id is given."""
    data = ResourceData(
        {
            "name": name,
            "server_name": server_name,
            "resource_group_name": resource_group_name,
            "location": location,
            "edition": edition,
            "dtu": dtu,
            "db_dtu_min": db_dtu_min,
            "db_dtu_max": db_dtu_max,
            "pool_size": pool_size,
            "tags": _parse_tags(tags),
        },
        resource_id=resource_id,
    )
    adapter = _adapter()
    _run(adapter.update if resource_id else adapter.create, data, _clients())
    print_success(f"Elastic pool '{name}' is up to date")
    _print_state(data)


@cli.command()
@click.argument("resource_id")
def show(resource_id: str) -> None:
    """Read an elastic pool by ID."""
    data = ResourceData(resource_id=resource_id)
    _run(_adapter().read, data, _clients())
    if not data.exists:
        print_warning(f"Elastic pool no longer exists: {resource_id}")
        return
    _print_state(data)


@cli.command()
@click.argument("resource_id")
def destroy(resource_id: str) -> None:
    """Delete an elastic pool by ID (does not wait for completion)."""
    data = ResourceData(resource_id=resource_id)
    _run(_adapter().delete, data, _clients())
    print_success(f"Delete requested for {resource_id}")


@cli.command("import")
@click.argument("resource_id")
def import_(resource_id: str) -> None:
    """Import an existing elastic pool and print its state."""
    adapter = _adapter()
    clients = _clients()
    for data in adapter.import_state(ResourceData(resource_id=resource_id), clients):
        _run(adapter.read, data, clients)
        if not data.exists:
            die(f"Cannot import non-existent elastic pool {resource_id}")
        _print_state(data)


if __name__ == "__main__":
    cli()

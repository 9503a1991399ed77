"""Typer-based CLI for querying and serving exchange chain status."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .catalog import AssetDescriptor, Category, filter_catalog
from .exchanges.protocol import StatusState

if TYPE_CHECKING:
    from .assembler import AggregationResult
    from .di import AppContainer


# Resolved lazily so tests can patch them without building real sessions
def _load_settings(config_path: Optional[Path] = None):
    from .config import load_settings
    return load_settings(config_path)

def _build_container(settings):
    from .di import build_container
    return build_container(settings)

def _create_app(container):
    from .server import create_app
    return create_app(container)

app = typer.Typer(help="Exchange deposit/withdraw status aggregator")
console = Console()
logger = logging.getLogger(__name__)

_STATE_STYLE = {
    StatusState.OPEN: "[green]open[/green]",
    StatusState.CLOSED: "[red]closed[/red]",
    StatusState.UNSUPPORTED: "[dim]n/a[/dim]",
    StatusState.ERROR: "[yellow]error[/yellow]",
    StatusState.TIMEOUT: "[yellow]timeout[/yellow]",
}


def run_cli(argv: list[str] | None = None) -> None:
    """Run CLI with optional argv parameter."""
    app(argv)


def init_components(config_path: Optional[Path] = None) -> "AppContainer":
    """Load settings and wire the container."""
    settings = _load_settings(config_path)
    return _build_container(settings)


def render_table(result: "AggregationResult") -> Table:
    """Asset rows by exchange columns, each cell 'deposit / withdraw'."""
    table = Table(title=f"Chain status ({result.count} assets)")
    table.add_column("Asset", style="bold")
    table.add_column("Category")

    exchange_names: list[str] = []
    if result.assets:
        exchange_names = list(result.assets[0].exchanges)
    for name in exchange_names:
        table.add_column(name, justify="center")

    for aggregated in result.assets:
        asset = aggregated.asset
        cells = []
        for name in exchange_names:
            status = aggregated.exchanges[name]
            cells.append(f"{_STATE_STYLE[status.deposit]} / {_STATE_STYLE[status.withdraw]}")
        table.add_row(f"{asset.name} ({asset.symbol})", asset.category.value, *cells)

    return table


async def _aggregate_async(container: "AppContainer", assets: Sequence[AssetDescriptor]) -> "AggregationResult":
    try:
        return await container.orchestrator.aggregate(assets)
    finally:
        await container.close()


@app.command()
def status(
    category: Optional[str] = typer.Option(None, help="Only this category (UTXO, EVM, 'EVM L2', Non-EVM)"),
    search: Optional[str] = typer.Option(None, help="Substring of asset name or symbol"),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON payload instead of a table"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Query every exchange once and print deposit/withdraw status."""
    try:
        wanted = Category.parse(category) if category else None
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    try:
        container = init_components(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    assets = filter_catalog(container.catalog, wanted, search)
    if not assets:
        console.print("[yellow]No assets match the given filters[/yellow]")
        raise typer.Exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=as_json,
    ) as progress:
        progress.add_task(f"Querying {len(container.adapters)} exchanges for {len(assets)} assets...", total=None)
        result = asyncio.run(_aggregate_async(container, assets))

    if as_json:
        typer.echo(json.dumps(result.to_payload(), indent=2, ensure_ascii=False))
        return

    console.print(render_table(result))


@app.command()
def exchanges(
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """List enabled exchanges with their endpoint and retry policy."""
    try:
        container = init_components(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Exchanges")
    table.add_column("Exchange", style="bold")
    table.add_column("Endpoint")
    table.add_column("Attempts", justify="right")

    for adapter in container.adapters:
        table.add_row(adapter.name, adapter.endpoint, str(adapter.max_attempts))

    console.print(table)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, help="Port (default from config)"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Serve GET /api/chain-status over HTTP."""
    import uvicorn

    try:
        container = init_components(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    server = container.settings.server
    bind_host = host or server.host
    bind_port = port or server.port

    logger.info("serving chain status on http://%s:%d", bind_host, bind_port)
    uvicorn.run(_create_app(container), host=bind_host, port=bind_port, log_config=None)

"""Runs command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..db import RunManager, get_connection
from ..errors import ConfigError

console = Console()


def runs_command(
    phase: Optional[str] = typer.Option(None, "--phase", "-p", help="Only crawl or augment runs"),
    limit: int = typer.Option(10, "--limit", "-l", help="Maximum runs to show"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.config/blogpipe/config.yaml)",
    ),
) -> None:
    """Show recent pipeline runs."""
    config = Config(config_path)
    try:
        config.require(database=True)
    except ConfigError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    with get_connection(config.get_db_config()) as conn:
        runs = RunManager().get_recent_runs(conn, phase=phase, limit=limit)

    if not runs:
        console.print("[yellow]No runs recorded yet.[/yellow]")
        return

    table = Table(title="Recent Runs")
    table.add_column("ID", style="dim")
    table.add_column("Phase", style="cyan")
    table.add_column("Started", style="magenta")
    table.add_column("Status", style="bold")
    table.add_column("Duration", style="yellow")

    for run in runs:
        color = {"success": "green", "failed": "red"}.get(run.status, "yellow")
        duration = "-"
        if run.finished_at:
            duration = f"{(run.finished_at - run.started_at).total_seconds():.1f}s"
        table.add_row(
            str(run.id),
            run.phase,
            run.started_at.strftime("%Y-%m-%d %H:%M:%S"),
            f"[{color}]{run.status}[/{color}]",
            duration,
        )

    console.print(table)

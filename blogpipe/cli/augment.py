"""Augment command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..errors import ConfigError
from ..pipeline import AugmentPipeline

console = Console()


def augment_command(
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-l",
        help="Maximum pending articles to process",
        min=1,
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.config/blogpipe/config.yaml)",
    ),
) -> None:
    """Rewrite pending articles using web search references."""
    try:
        pipeline = AugmentPipeline(Config(config_path))
        success = pipeline.run(limit=limit)

        if not success:
            raise typer.Exit(1)

    except ConfigError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Augmentation interrupted by user[/yellow]")
        raise typer.Exit(1)

"""Crawl command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..errors import ConfigError
from ..pipeline import CrawlPipeline

console = Console()


def crawl_command(
    batch_size: Optional[int] = typer.Option(
        None,
        "--batch-size",
        "-n",
        help="Articles to extract from the oldest index page",
        min=1,
    ),
    headful: bool = typer.Option(
        False,
        "--headful",
        help="Show the browser window",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.config/blogpipe/config.yaml)",
    ),
) -> None:
    """Crawl the source blog and store the oldest batch of articles."""
    try:
        pipeline = CrawlPipeline(Config(config_path))
        success = pipeline.run(batch_size=batch_size, headless=not headful)

        if not success:
            raise typer.Exit(1)

    except ConfigError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Crawl interrupted by user[/yellow]")
        raise typer.Exit(1)

"""Article browsing commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..config import Config
from ..db import ArticleStore, get_connection
from ..errors import ConfigError
from ..models import ArticleState

console = Console()
articles_app = typer.Typer(help="Browse stored articles")

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Config file (default: ~/.config/blogpipe/config.yaml)",
)


def _db_config(config_path: Optional[Path]) -> dict:
    config = Config(config_path)
    try:
        config.require(database=True)
    except ConfigError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    return config.get_db_config()


@articles_app.command("list")
def articles_list(
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum articles to show"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """List stored articles, newest first."""
    with get_connection(_db_config(config_path)) as conn:
        articles = ArticleStore().list_articles(conn, limit)

    if not articles:
        console.print("[yellow]No articles stored. Run 'blogpipe crawl' first.[/yellow]")
        return

    table = Table(title="Stored Articles")
    table.add_column("Title", style="cyan")
    table.add_column("Date", style="magenta")
    table.add_column("State", style="green")
    table.add_column("Refs", style="yellow")
    table.add_column("URL", style="blue")

    for article in articles:
        state = "✓ augmented" if article.state == ArticleState.AUGMENTED else "pending"
        table.add_row(
            article.title,
            article.date or "-",
            state,
            str(len(article.references)),
            article.url,
        )

    console.print(table)


@articles_app.command("show")
def articles_show(
    url: str = typer.Argument(..., help="Article URL"),
    original: bool = typer.Option(
        False,
        "--original",
        help="Show the text as scraped instead of the rewrite",
    ),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Show one article with its references."""
    with get_connection(_db_config(config_path)) as conn:
        article = ArticleStore().get_article(conn, url)

    if article is None:
        console.print(f"[red]Article not found: {url}[/red]")
        raise typer.Exit(1)

    body = article.original_content if original else article.content
    label = "original" if original or article.state == ArticleState.PENDING else "rewritten"

    console.print(Panel.fit(
        f"[bold]{article.title}[/bold]\n{article.date or ''}\n{article.url}",
        subtitle=label,
    ))
    console.print(Markdown(body))

    if article.references:
        console.print("\n[bold]References:[/bold]")
        for reference in article.references:
            console.print(f"  - {reference.title}: [blue]{reference.link}[/blue]")

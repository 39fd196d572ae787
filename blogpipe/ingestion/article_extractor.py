"""Article page fetcher and content extractor."""

from typing import List, Optional, Tuple

import psycopg
from psycopg import Connection
from rich.console import Console

from ..config import ContentStrategy
from ..db.articles import ArticleStore
from .browser import BrowserSession
from .html import element_text, parse_soup
from .models import DiscoveryRecord, ExtractionResult

console = Console()


def extract_content(html: str, strategies: List[ContentStrategy]) -> Optional[Tuple[str, str]]:
    """
    Main text of an article page.

    Strategies are tried in order and the first one whose container
    holds text wins.

    Returns:
        Tuple of (strategy_name, text), or None if nothing matched
    """
    soup = parse_soup(html)
    for strategy in strategies:
        element = soup.select_one(strategy.selector)
        if element is None:
            continue
        text = element_text(element)
        if text:
            return strategy.name, text
    return None


class ArticleExtractor:
    """Fetch discovered articles and store their content."""

    def __init__(
        self,
        browser: BrowserSession,
        store: ArticleStore,
        strategies: List[ContentStrategy],
    ) -> None:
        """Initialize article extractor."""
        self.browser = browser
        self.store = store
        self.strategies = strategies

    def extract_article(self, conn: Connection, record: DiscoveryRecord) -> ExtractionResult:
        """
        Fetch, extract and upsert one article.

        Page failures are reported in the result. Database errors propagate.
        """
        console.print(f"\n[bold]Scraping:[/bold] {record.title}")
        try:
            html = self.browser.fetch_html(record.url)
            extracted = extract_content(html, self.strategies)

            if extracted is None:
                console.print(f"[yellow]No content text found for {record.title}[/yellow]")
                return ExtractionResult(
                    url=record.url,
                    title=record.title,
                    success=False,
                    error="No content found",
                )

            strategy, text = extracted
            is_new = self.store.upsert_scraped(conn, record, text)
            console.print(f"[green]Saved[/green] ({strategy}, {len(text)} chars)")

            return ExtractionResult(
                url=record.url,
                title=record.title,
                success=True,
                strategy=strategy,
                is_new=is_new,
            )
        except psycopg.Error:
            raise
        except Exception as e:
            console.print(f"[red]Failed to scrape {record.title}: {e}[/red]")
            return ExtractionResult(
                url=record.url,
                title=record.title,
                success=False,
                error=str(e),
            )

    def extract_all(self, conn: Connection, records: List[DiscoveryRecord]) -> List[ExtractionResult]:
        """Extract articles one at a time."""
        return [self.extract_article(conn, record) for record in records]


def print_extraction_summary(results: List[ExtractionResult]) -> None:
    """Print summary of article extraction results."""
    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful

    console.print("\n[bold]Article Extraction Summary:[/bold]")
    console.print(f"  Total articles: {len(results)}")
    console.print(f"  Stored: [green]{successful}[/green] ({sum(1 for r in results if r.is_new)} new)")
    console.print(f"  Skipped: [red]{failed}[/red]")

    if failed > 0:
        console.print("\n[bold red]Skipped articles:[/bold red]")
        for result in results:
            if not result.success:
                console.print(f"  - {result.title}: {result.error}")

"""Crawl phase: discover the oldest blog articles and store their text."""

import time
from typing import List, Optional

import psycopg
from psycopg import Connection
from rich.console import Console
from rich.panel import Panel

from ..config import Config
from ..db import ArticleStore, RunManager, get_connection
from ..ingestion import (
    ArticleExtractor,
    BlogCrawler,
    BrowserSession,
    DiscoveryRecord,
    open_browser,
    print_extraction_summary,
)
from .stages import PipelineStage, print_summary, stage_stats

console = Console()


class CrawlPipeline:
    """Run the crawl phase as one bounded batch job."""

    def __init__(self, config: Config, store: Optional[ArticleStore] = None):
        """Initialize crawl pipeline."""
        self.config = config
        self.store = store or ArticleStore()
        self.stages = [
            PipelineStage("discover", "Discovering articles on the oldest index page"),
            PipelineStage("extract", "Extracting and storing article content"),
        ]
        self.run_id: Optional[int] = None
        self.total_start_time: Optional[float] = None

    def run(self, batch_size: Optional[int] = None, headless: bool = True) -> bool:
        """
        Run the crawl phase.

        Raises:
            ConfigError: if the database connection string is missing

        Returns:
            True if the run finished without a fatal error
        """
        self.config.require(database=True)
        self.total_start_time = time.time()
        source = self.config.config.source
        http = self.config.config.http

        console.print(Panel.fit(
            f"🕷️ blogpipe crawl\nSource: {source.base_url} • Batch: {batch_size or source.batch_size}",
            style="bold blue",
        ))

        run_manager = RunManager()
        try:
            with get_connection(self.config.get_db_config()) as conn:
                self.run_id = run_manager.create_run(conn, "crawl")
                success = False
                try:
                    with open_browser(
                        headless=headless,
                        navigation_timeout=http.navigation_timeout,
                        user_agent=http.user_agent,
                    ) as browser:
                        success = self.execute(conn, browser, batch_size)
                finally:
                    conn.rollback()
                    run_manager.update_run_status(
                        conn,
                        self.run_id,
                        "success" if success else "failed",
                        {
                            "total_duration": time.time() - self.total_start_time,
                            "stages": stage_stats(self.stages),
                        },
                    )
                return success

        except Exception as e:
            console.print(f"[red]Crawl failed: {e}[/red]")
            return False
        finally:
            print_summary(
                "Crawl",
                self.stages,
                time.time() - self.total_start_time,
                self._describe,
            )

    def execute(
        self,
        conn: Connection,
        browser: BrowserSession,
        batch_size: Optional[int] = None,
    ) -> bool:
        """Execute the crawl stages with an open connection and browser."""
        source = self.config.config.source
        records: List[DiscoveryRecord] = []

        # Stage 1: discover
        stage = self.stages[0]
        stage.start()
        try:
            crawler = BlogCrawler(browser, source)
            records = crawler.discover(batch_size)
            stage.complete({"selected": len(records)})
        except Exception as e:
            stage.fail(str(e))
            console.print(f"[red]{e}[/red]")
            return False

        # Stage 2: extract
        stage = self.stages[1]
        stage.start()
        extractor = ArticleExtractor(browser, self.store, source.content_strategies)
        try:
            results = extractor.extract_all(conn, records)
        except psycopg.Error as e:
            stage.fail(str(e))
            raise
        print_extraction_summary(results)
        stage.complete({
            "total": len(results),
            "stored": sum(1 for r in results if r.success),
            "new": sum(1 for r in results if r.is_new),
            "skipped": sum(1 for r in results if not r.success),
        })

        return True

    def _describe(self, stage: PipelineStage) -> str:
        if stage.name == "discover":
            return f"{stage.stats.get('selected', 0)} articles selected"
        return (
            f"{stage.stats.get('stored', 0)} stored "
            f"({stage.stats.get('new', 0)} new), {stage.stats.get('skipped', 0)} skipped"
        )

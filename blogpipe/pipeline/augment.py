"""Augment phase: enrich pending articles with references and a rewrite."""

import time
from enum import Enum
from typing import Dict, List, Optional, Tuple

import httpx
from psycopg import Connection
from rich.console import Console
from rich.panel import Panel

from ..augmentation import (
    LLMProvider,
    MockLLMProvider,
    OpenAIProvider,
    ReferenceFetcher,
    RewriteSynthesizer,
    SerpAPISearchClient,
    build_context,
)
from ..config import Config
from ..db import ArticleStore, RunManager, get_connection
from ..errors import ConfigError, RewriteError
from ..models import Article
from .stages import PipelineStage, print_summary, stage_stats

console = Console()


class AugmentOutcome(str, Enum):
    """How one article's augmentation attempt ended.

    Only AUGMENTED changes the stored article; every other outcome
    leaves it pending for a later run.
    """

    AUGMENTED = "augmented"
    NO_REFERENCES = "no_references"
    NO_CONTEXT = "no_context"
    EMPTY_REWRITE = "empty_rewrite"
    FAILED = "failed"
    STALE = "stale"


class AugmentationOrchestrator:
    """Drive search, reference extraction and rewriting for stored articles."""

    def __init__(
        self,
        store: ArticleStore,
        search_client: SerpAPISearchClient,
        reference_fetcher: ReferenceFetcher,
        synthesizer: RewriteSynthesizer,
    ) -> None:
        """Initialize augmentation orchestrator."""
        self.store = store
        self.search_client = search_client
        self.reference_fetcher = reference_fetcher
        self.synthesizer = synthesizer

    def augment_article(self, conn: Connection, article: Article) -> AugmentOutcome:
        """Augment one pending article."""
        console.print(f"\n[bold]Processing:[/bold] {article.title}")

        # Searching
        references = self.search_client.search(article.title)
        if not references:
            console.print("[yellow]No references found, skipping[/yellow]")
            return AugmentOutcome.NO_REFERENCES

        # Reference extraction
        sections: List[Tuple[str, str]] = []
        for reference in references:
            console.print(f"  Reading: {reference.title}")
            text = self.reference_fetcher.fetch_text(reference.link)
            if text:
                sections.append((reference.title, text))

        context = build_context(sections)
        if not context:
            console.print("[yellow]Could not read any reference, skipping[/yellow]")
            return AugmentOutcome.NO_CONTEXT

        # Rewriting
        try:
            rewritten = self.synthesizer.rewrite(article.original_content, context)
        except RewriteError as e:
            console.print(f"[red]Rewrite failed: {e}[/red]")
            return AugmentOutcome.FAILED

        if not rewritten or not rewritten.strip():
            console.print("[yellow]Model returned an empty rewrite, skipping[/yellow]")
            return AugmentOutcome.EMPTY_REWRITE

        if rewritten.strip() == article.original_content.strip():
            console.print("[yellow]Model returned the original text unchanged, skipping[/yellow]")
            return AugmentOutcome.EMPTY_REWRITE

        # Persisting
        if not self.store.mark_augmented(conn, article.url, rewritten, references):
            console.print("[yellow]Article was no longer pending, not saved[/yellow]")
            return AugmentOutcome.STALE

        console.print("[green]Article rewritten and saved[/green]")
        return AugmentOutcome.AUGMENTED

    def augment_pending(self, conn: Connection, limit: Optional[int] = None) -> Dict[str, int]:
        """
        Augment every pending article, one at a time.

        Returns:
            Count of articles per outcome, plus ``selected``
        """
        articles = self.store.select_pending(conn, limit)
        console.print(f"Found {len(articles)} articles to process.")

        stats = {"selected": len(articles)}
        stats.update({outcome.value: 0 for outcome in AugmentOutcome})

        for article in articles:
            outcome = self.augment_article(conn, article)
            stats[outcome.value] += 1

        return stats


def build_llm_provider(llm_config: Dict) -> LLMProvider:
    """Get configured LLM provider."""
    provider = llm_config.get("provider")

    if provider == "mock":
        return MockLLMProvider()

    if provider == "openai":
        api_key = llm_config.get("api_key")
        if not api_key:
            raise ConfigError(f"Missing required configuration: {llm_config.get('api_key_env')}")
        return OpenAIProvider(
            api_key=api_key,
            model=llm_config.get("model", "gpt-4o-mini"),
            base_url=llm_config.get("base_url"),
            temperature=llm_config.get("temperature", 0.4),
            max_tokens=llm_config.get("max_tokens", 2000),
        )

    raise ConfigError(f"Unknown LLM provider: {provider}")


class AugmentPipeline:
    """Run the augment phase as one bounded batch job."""

    def __init__(self, config: Config, store: Optional[ArticleStore] = None):
        """Initialize augment pipeline."""
        self.config = config
        self.store = store or ArticleStore()
        self.stages = [
            PipelineStage("augment", "Augmenting pending articles"),
        ]
        self.run_id: Optional[int] = None
        self.total_start_time: Optional[float] = None
        self.llm_provider: Optional[LLMProvider] = None

    def run(self, limit: Optional[int] = None) -> bool:
        """
        Run the augment phase.

        Raises:
            ConfigError: if a required credential is missing

        Returns:
            True if the run finished without a fatal error
        """
        self.config.require(database=True, search=True, llm=True)
        self.total_start_time = time.time()

        search_config = self.config.get_search_config()
        http = self.config.config.http
        self.llm_provider = build_llm_provider(self.config.get_llm_config())

        console.print(Panel.fit(
            f"🧠 blogpipe augment\nModel: {self.config.config.llm.model} • "
            f"References per article: {search_config['max_references']}",
            style="bold blue",
        ))

        run_manager = RunManager()
        try:
            with get_connection(self.config.get_db_config()) as conn, \
                    httpx.Client(timeout=http.timeout) as search_http, \
                    httpx.Client(
                        timeout=http.timeout,
                        follow_redirects=True,
                        headers={"User-Agent": http.user_agent},
                    ) as page_http:
                self.run_id = run_manager.create_run(conn, "augment")

                orchestrator = AugmentationOrchestrator(
                    store=self.store,
                    search_client=SerpAPISearchClient(
                        api_key=search_config["api_key"],
                        client=search_http,
                        endpoint=search_config["endpoint"],
                        num_results=search_config["num_results"],
                        max_references=search_config["max_references"],
                        blocked_patterns=search_config["blocked_patterns"],
                    ),
                    reference_fetcher=ReferenceFetcher(page_http, http.reference_chars),
                    synthesizer=RewriteSynthesizer(
                        self.llm_provider,
                        self.config.config.llm.original_chars,
                    ),
                )

                success = False
                try:
                    success = self.execute(conn, orchestrator, limit)
                finally:
                    conn.rollback()
                    run_manager.update_run_status(
                        conn,
                        self.run_id,
                        "success" if success else "failed",
                        {
                            "total_duration": time.time() - self.total_start_time,
                            "stages": stage_stats(self.stages),
                            "llm": self.llm_provider.get_usage_stats(),
                        },
                    )
                return success

        except Exception as e:
            console.print(f"[red]Augmentation failed: {e}[/red]")
            return False
        finally:
            print_summary(
                "Augment",
                self.stages,
                time.time() - self.total_start_time,
                self._describe,
            )

    def execute(
        self,
        conn: Connection,
        orchestrator: AugmentationOrchestrator,
        limit: Optional[int] = None,
    ) -> bool:
        """Execute the augment stage with an open connection."""
        stage = self.stages[0]
        stage.start()
        try:
            stats = orchestrator.augment_pending(conn, limit)
            stats.update(self.llm_provider.get_usage_stats() if self.llm_provider else {})
            stage.complete(stats)
        except Exception as e:
            stage.fail(str(e))
            return False
        return True

    def _describe(self, stage: PipelineStage) -> str:
        skipped = stage.stats.get("selected", 0) - stage.stats.get("augmented", 0)
        return (
            f"{stage.stats.get('augmented', 0)} of {stage.stats.get('selected', 0)} augmented, "
            f"{skipped} left pending, {stage.stats.get('total_tokens', 0)} tokens, "
            f"${stage.stats.get('estimated_cost', 0.0):.3f}"
        )

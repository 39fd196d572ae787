"""Tests for article content extraction and storage."""

import psycopg
import pytest

from blogpipe.config.models import default_content_strategies
from blogpipe.ingestion.article_extractor import ArticleExtractor, extract_content
from blogpipe.models import DiscoveryRecord, Reference

from conftest import FakeBrowser

STRATEGIES = default_content_strategies()


def page(body: str) -> str:
    return f"<html><body><header><nav>Home | Blogs</nav></header>{body}</body></html>"


class TestExtractContent:
    """Ordered content strategies, first non-empty match wins."""

    def test_primary_container(self) -> None:
        html = page('<article><div class="entry-content"><p>First.</p><p>Second.</p></div></article>')
        assert extract_content(html, STRATEGIES) == ("entry-content", "First.\nSecond.")

    def test_alternate_container(self) -> None:
        html = page('<div class="post-content"><p>Alternate body.</p></div>')
        assert extract_content(html, STRATEGIES) == ("post-content", "Alternate body.")

    def test_generic_article_container(self) -> None:
        html = page("<article><h1>Title</h1><p>Generic body.</p></article>")
        assert extract_content(html, STRATEGIES) == ("article", "Title\nGeneric body.")

    def test_empty_container_falls_through(self) -> None:
        html = page('<div class="entry-content">  </div><div class="post-content"><p>Body.</p></div>')
        assert extract_content(html, STRATEGIES) == ("post-content", "Body.")

    def test_nothing_matches(self) -> None:
        assert extract_content(page("<div><p>Stray text.</p></div>"), STRATEGIES) is None


class TestArticleExtractor:
    """Fetching, skipping and upserting discovered articles."""

    def _record(self, slug: str) -> DiscoveryRecord:
        return DiscoveryRecord(title=slug.title(), url=f"http://x/{slug}", date="2023-01-01")

    def test_stores_extracted_article(self, store) -> None:
        browser = FakeBrowser({"http://x/a": page('<div class="entry-content"><p>Body A.</p></div>')})
        extractor = ArticleExtractor(browser, store, STRATEGIES)

        result = extractor.extract_article(None, self._record("a"))

        assert result.success is True
        assert result.is_new is True
        assert result.strategy == "entry-content"
        stored = store.articles["http://x/a"]
        assert stored.content == stored.original_content == "Body A."
        assert stored.is_updated is False
        assert stored.date == "2023-01-01"

    def test_article_without_content_is_skipped(self, store) -> None:
        browser = FakeBrowser({"http://x/a": page("<div>nothing here</div>")})

        result = ArticleExtractor(browser, store, STRATEGIES).extract_article(None, self._record("a"))

        assert result.success is False
        assert result.error == "No content found"
        assert store.articles == {}

    def test_failures_do_not_stop_the_batch(self, store) -> None:
        browser = FakeBrowser({
            "http://x/a": page('<div class="entry-content">A</div>'),
            "http://x/c": page('<div class="entry-content">C</div>'),
        })
        records = [self._record("a"), self._record("b"), self._record("c")]

        results = ArticleExtractor(browser, store, STRATEGIES).extract_all(None, records)

        assert [r.success for r in results] == [True, False, True]
        assert "404" in results[1].error
        assert sorted(store.articles) == ["http://x/a", "http://x/c"]

    def test_rescrape_updates_in_place_and_resets_state(self, store) -> None:
        browser = FakeBrowser({"http://x/a": page('<div class="entry-content">Fresh text.</div>')})
        extractor = ArticleExtractor(browser, store, STRATEGIES)
        extractor.extract_article(None, self._record("a"))
        store.mark_augmented(None, "http://x/a", "Rewritten", [Reference(title="R1", link="http://r1")])

        result = extractor.extract_article(None, self._record("a"))

        assert result.is_new is False
        assert len(store.articles) == 1
        article = store.articles["http://x/a"]
        assert article.is_updated is False
        assert article.content == article.original_content == "Fresh text."
        assert article.references == []

    def test_database_errors_propagate(self, store, monkeypatch) -> None:
        def broken_upsert(conn, record, content):
            raise psycopg.OperationalError("server closed the connection")

        monkeypatch.setattr(store, "upsert_scraped", broken_upsert)
        browser = FakeBrowser({
            "http://x/a": page('<div class="entry-content">A</div>'),
            "http://x/b": page('<div class="entry-content">B</div>'),
        })
        extractor = ArticleExtractor(browser, store, STRATEGIES)

        with pytest.raises(psycopg.OperationalError):
            extractor.extract_all(None, [self._record("a"), self._record("b")])
        assert browser.visited == ["http://x/a"]

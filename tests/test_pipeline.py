"""Tests for phase pipelines and the command line entry points."""

import psycopg
import pytest
from typer.testing import CliRunner

from blogpipe.cli import app
from blogpipe.config import Config, ConfigModel
from blogpipe.pipeline import CrawlPipeline

from conftest import FakeBrowser

BASE = "https://blog.example.com/blogs/"

runner = CliRunner()


def _config(tmp_path) -> Config:
    model = ConfigModel()
    model.source.base_url = BASE
    model.source.batch_size = 2
    return Config(tmp_path / "unused.yaml", config=model)


def _index(last_page: int) -> str:
    return (
        "<html><body><nav>"
        '<span class="page-numbers current">1</span>'
        f'<a class="page-numbers" href="{BASE}page/{last_page}/">{last_page}</a>'
        "</nav></body></html>"
    )


def _listing(slugs) -> str:
    cards = "".join(
        f'<article class="entry-card"><h2 class="entry-title"><a href="{BASE}{s}/">{s}</a></h2></article>'
        for s in slugs
    )
    return f"<html><body>{cards}</body></html>"


def _post(text: str) -> str:
    return f'<html><body><div class="entry-content"><p>{text}</p></div></body></html>'


class TestCrawlPipeline:
    """Crawl stages against canned pages and an in-memory store."""

    def test_execute_stores_batch(self, tmp_path, store) -> None:
        browser = FakeBrowser({
            BASE: _index(4),
            f"{BASE}page/3/": _listing(["one", "two", "three"]),
            f"{BASE}two/": _post("Second post."),
            f"{BASE}three/": _post("Third post."),
        })
        pipeline = CrawlPipeline(_config(tmp_path), store=store)

        assert pipeline.execute(None, browser) is True

        assert sorted(store.articles) == [f"{BASE}three/", f"{BASE}two/"]
        assert store.articles[f"{BASE}two/"].original_content == "Second post."
        assert pipeline.stages[1].stats == {"total": 2, "stored": 2, "new": 2, "skipped": 0}

    def test_failed_article_does_not_stop_batch(self, tmp_path, store) -> None:
        browser = FakeBrowser({
            BASE: _index(2),
            f"{BASE}page/1/": _listing(["gone", "kept"]),
            f"{BASE}kept/": _post("Kept."),
        })
        pipeline = CrawlPipeline(_config(tmp_path), store=store)

        assert pipeline.execute(None, browser) is True

        assert list(store.articles) == [f"{BASE}kept/"]
        assert pipeline.stages[1].stats["skipped"] == 1

    def test_unreachable_index_fails_run(self, tmp_path, store) -> None:
        pipeline = CrawlPipeline(_config(tmp_path), store=store)

        assert pipeline.execute(None, FakeBrowser({})) is False

        assert pipeline.stages[0].success is False
        assert "blog index" in pipeline.stages[0].error
        assert store.articles == {}

    def test_database_error_fails_extract_stage(self, tmp_path, store, monkeypatch) -> None:
        def broken_upsert(conn, record, content):
            raise psycopg.OperationalError("server closed the connection")

        monkeypatch.setattr(store, "upsert_scraped", broken_upsert)
        browser = FakeBrowser({
            BASE: _index(2),
            f"{BASE}page/1/": _listing(["only"]),
            f"{BASE}only/": _post("Only."),
        })
        pipeline = CrawlPipeline(_config(tmp_path), store=store)

        with pytest.raises(psycopg.OperationalError):
            pipeline.execute(None, browser)

        assert pipeline.stages[1].success is False
        assert "server closed" in pipeline.stages[1].error


class TestCli:
    """Commands exit non-zero on missing credentials."""

    def test_crawl_without_database(self, tmp_path) -> None:
        result = runner.invoke(app, ["crawl", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "DATABASE_URL" in result.output

    def test_augment_without_keys(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost/blogpipe")

        result = runner.invoke(app, ["augment", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "SERPAPI_KEY" in result.output

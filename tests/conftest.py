"""Shared fixtures and fakes for the blogpipe test suite."""

from typing import Dict, List, Optional, Sequence

import pytest

from blogpipe.errors import NavigationError
from blogpipe.models import Article, DiscoveryRecord, Reference


class FakeArticleStore:
    """In-memory stand-in for ArticleStore with the same write semantics."""

    def __init__(self) -> None:
        self.articles: Dict[str, Article] = {}
        self._next_id = 1

    def add(self, article: Article) -> Article:
        article.id = self._next_id
        self._next_id += 1
        self.articles[article.url] = article
        return article

    def upsert_scraped(self, conn, record: DiscoveryRecord, content: str) -> bool:
        existing = self.articles.get(record.url)
        if existing is None:
            self.add(Article(
                url=record.url,
                title=record.title,
                date=record.date,
                original_content=content,
                content=content,
            ))
            return True

        existing.title = record.title
        existing.date = record.date
        existing.original_content = content
        existing.content = content
        existing.is_updated = False
        existing.references = []
        return False

    def select_pending(self, conn, limit: Optional[int] = None) -> List[Article]:
        pending = [a.model_copy(deep=True) for a in self.articles.values() if not a.is_updated]
        return pending if limit is None else pending[:limit]

    def mark_augmented(self, conn, url: str, content: str, references: Sequence[Reference]) -> bool:
        article = self.articles.get(url)
        if article is None or article.is_updated:
            return False
        article.content = content
        article.is_updated = True
        article.references = list(references)
        return True

    def list_articles(self, conn, limit: Optional[int] = None) -> List[Article]:
        newest = sorted(self.articles.values(), key=lambda a: a.id, reverse=True)
        return newest if limit is None else newest[:limit]

    def get_article(self, conn, url: str) -> Optional[Article]:
        return self.articles.get(url)


class FakeBrowser:
    """Browser session serving canned HTML by URL."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.visited: List[str] = []

    def fetch_html(self, url: str) -> str:
        self.visited.append(url)
        if url not in self.pages:
            raise NavigationError(f"HTTP 404 for {url}")
        return self.pages[url]


def make_article(
    url: str = "http://x/a",
    title: str = "A",
    content: str = "Original body of article A.",
    **kwargs,
) -> Article:
    return Article(url=url, title=title, original_content=content, content=content, **kwargs)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real credentials out of tests."""
    for name in ("DATABASE_URL", "SERPAPI_KEY", "OPENAI_API_KEY", "BLOGPIPE_CONFIG", "BLOGPIPE_DB_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store() -> FakeArticleStore:
    return FakeArticleStore()

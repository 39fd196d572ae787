"""Readable-text extraction for reference pages."""

import logging
import warnings
from contextlib import contextmanager
from typing import Generator, Optional

import httpx
import trafilatura
from rich.console import Console

console = Console()

# Libraries that report recoverable markup problems through logging.
_NOISY_LOGGERS = ("trafilatura", "htmldate", "courlan", "readability", "justext")


@contextmanager
def _quiet_parsing() -> Generator[None, None, None]:
    """Silence parse warnings while extracting."""
    loggers = [logging.getLogger(name) for name in _NOISY_LOGGERS]
    levels = [logger.level for logger in loggers]
    for logger in loggers:
        logger.setLevel(logging.CRITICAL)
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            yield
    finally:
        for logger, level in zip(loggers, levels):
            logger.setLevel(level)


def extract_readable_text(html: str, url: str, max_chars: int = 2000) -> Optional[str]:
    """
    Main text of a web page with navigation and boilerplate removed.

    Args:
        html: Raw page HTML
        url: Page URL, used to resolve the document's context
        max_chars: Length cap on the returned text

    Returns:
        Extracted text truncated to ``max_chars``, or None if no article
        body was found or parsing failed
    """
    if not html or not html.strip():
        return None

    try:
        with _quiet_parsing():
            extracted = trafilatura.extract(
                html,
                url=url,
                include_comments=False,
                include_tables=False,
                deduplicate=True,
            )
    except Exception:
        return None

    if not extracted or not extracted.strip():
        return None

    return extracted.strip()[:max_chars]


class ReferenceFetcher:
    """Download reference pages and extract their readable text."""

    def __init__(self, client: httpx.Client, max_chars: int = 2000) -> None:
        """
        Initialize reference fetcher.

        Args:
            client: HTTP client owned by the caller, with browser-like headers
            max_chars: Length cap on each extracted text
        """
        self.client = client
        self.max_chars = max_chars

    def fetch_text(self, url: str) -> Optional[str]:
        """Fetch a page and extract its text; None on any failure."""
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            console.print(f"[yellow]Could not fetch reference {url}: {e}[/yellow]")
            return None

        text = extract_readable_text(response.text, str(response.url), self.max_chars)
        if text is None:
            console.print(f"[yellow]Could not extract reference text: {url}[/yellow]")
        return text

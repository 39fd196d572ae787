"""Blog index crawler."""

from typing import List, Optional

from rich.console import Console

from ..config import SourceConfig
from ..errors import CrawlError
from .browser import BrowserSession
from .html import article_cards, boundary_page, pagination_labels, parse_soup
from .models import DiscoveryRecord

console = Console()


def select_batch(records: List[DiscoveryRecord], batch_size: int) -> List[DiscoveryRecord]:
    """Keep records that have a URL, then the last ``batch_size`` of them."""
    with_url = [r for r in records if r.url]
    return with_url[-batch_size:] if batch_size > 0 else []


class BlogCrawler:
    """Discover the oldest batch of articles on the source blog.

    The crawler reads the pagination controls on the blog index, jumps
    to the boundary page and lists the article cards found there. Any
    failure at this level raises :class:`CrawlError`; without the index
    there is nothing usable to extract.
    """

    def __init__(self, browser: BrowserSession, source: SourceConfig) -> None:
        """Initialize blog crawler."""
        self.browser = browser
        self.source = source

    def find_boundary_page(self) -> int:
        """Load the index and compute which page to crawl."""
        console.print(f"[dim]Loading index {self.source.base_url}[/dim]")
        try:
            html = self.browser.fetch_html(self.source.base_url)
            labels = pagination_labels(parse_soup(html), self.source.pagination_selector)
        except Exception as e:
            raise CrawlError(f"Failed to read blog index: {e}") from e

        page = boundary_page(labels)
        console.print(f"  Pagination labels: {sorted(labels) or 'none'} -> page {page}")
        return page

    def list_page(self, page_number: int) -> List[DiscoveryRecord]:
        """All article cards on one index page."""
        page_url = self.source.page_url(page_number)
        console.print(f"[dim]Loading oldest page {page_url}[/dim]")
        try:
            html = self.browser.fetch_html(page_url)
            return article_cards(
                parse_soup(html),
                page_url,
                self.source.card_selector,
                self.source.title_link_selector,
                self.source.date_selector,
            )
        except Exception as e:
            raise CrawlError(f"Failed to read index page {page_number}: {e}") from e

    def discover(self, batch_size: Optional[int] = None) -> List[DiscoveryRecord]:
        """Discovery records for the next batch to extract."""
        if batch_size is None:
            batch_size = self.source.batch_size

        cards = self.list_page(self.find_boundary_page())
        batch = select_batch(cards, batch_size)

        console.print(f"  Found {len(cards)} article cards, {len(batch)} selected")
        return batch

"""HTML parsing helpers for the source blog's theme."""

import re
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .models import DiscoveryRecord

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_soup(html: str) -> BeautifulSoup:
    """Parse an HTML document."""
    return BeautifulSoup(html, "html.parser")


def element_text(element: Tag) -> str:
    """Visible text of an element, one line per text block."""
    lines = [line.strip() for line in element.get_text("\n").splitlines()]
    return "\n".join(line for line in lines if line)


def parse_page_label(text: str) -> Optional[int]:
    """Leading integer of a pagination label, None for labels like 'Next'."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def pagination_labels(soup: BeautifulSoup, selector: str) -> List[int]:
    """Numeric labels of all pagination controls."""
    labels = []
    for element in soup.select(selector):
        number = parse_page_label(element.get_text())
        if number is not None:
            labels.append(number)
    return labels


def boundary_page(labels: List[int]) -> int:
    """
    Index page to crawl: one before the highest pagination label.

    The theme's last numbered link sits one past the oldest page that
    lists full article cards. Never goes below page 1.
    """
    if not labels:
        return 1
    return max(max(labels) - 1, 1)


def article_cards(
    soup: BeautifulSoup,
    page_url: str,
    card_selector: str,
    title_link_selector: str,
    date_selector: str,
) -> List[DiscoveryRecord]:
    """Discovery records for every article card on an index page."""
    records = []
    for card in soup.select(card_selector):
        link = card.select_one(title_link_selector)
        time_el = card.select_one(date_selector)

        title = "No Title"
        url = ""
        if link is not None:
            title = link.get_text().strip() or title
            href = (link.get("href") or "").strip()
            url = urljoin(page_url, href) if href else ""

        date = None
        if time_el is not None:
            date = (time_el.get("datetime") or "").strip() or time_el.get_text().strip() or None

        records.append(DiscoveryRecord(title=title, url=url, date=date))
    return records

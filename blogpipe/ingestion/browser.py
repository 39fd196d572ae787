"""Headless browser session used by the crawl phase."""

from contextlib import contextmanager
from typing import Generator, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from ..errors import NavigationError


class BrowserSession:
    """Load pages in one browser tab and hand back their rendered HTML."""

    def __init__(self, page: Page, navigation_timeout: float = 30.0) -> None:
        """Initialize browser session."""
        self.page = page
        self.navigation_timeout = navigation_timeout

    def fetch_html(self, url: str) -> str:
        """Navigate to a URL and return the DOM once it has loaded."""
        try:
            response = self.page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=int(self.navigation_timeout * 1000),
            )
        except PlaywrightError as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e

        if response is not None and not response.ok:
            raise NavigationError(f"HTTP {response.status} for {url}")

        return self.page.content()


@contextmanager
def open_browser(
    headless: bool = True,
    navigation_timeout: float = 30.0,
    user_agent: Optional[str] = None,
) -> Generator[BrowserSession, None, None]:
    """Launch Chromium for one run; the browser is closed on every exit path."""
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=headless)
        try:
            page = browser.new_page(user_agent=user_agent)
            yield BrowserSession(page, navigation_timeout)
        finally:
            browser.close()

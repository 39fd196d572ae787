"""Web search client for finding reference material."""

from typing import List, Optional, Sequence

import httpx
from rich.console import Console

from ..models import Reference

console = Console()


class SerpAPISearchClient:
    """Query SerpAPI's Google results and keep the top usable links."""

    def __init__(
        self,
        api_key: str,
        client: httpx.Client,
        endpoint: str = "https://serpapi.com/search.json",
        num_results: int = 5,
        max_references: int = 2,
        blocked_patterns: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Initialize search client.

        Args:
            api_key: SerpAPI key
            client: HTTP client owned by the caller
            endpoint: SerpAPI JSON endpoint
            num_results: Results requested from the provider
            max_references: References returned after filtering
            blocked_patterns: Links containing any of these are dropped
        """
        self.api_key = api_key
        self.client = client
        self.endpoint = endpoint
        self.num_results = num_results
        self.max_references = max_references
        self.blocked_patterns = list(blocked_patterns or ["youtube.com", ".pdf"])

    def _is_blocked(self, link: str) -> bool:
        return any(pattern in link for pattern in self.blocked_patterns)

    def search(self, query: str) -> List[Reference]:
        """
        Search for pages related to a query.

        Returns:
            Up to ``max_references`` references in provider order, or an
            empty list if the request failed
        """
        console.print(f'[dim]Searching for "{query}"...[/dim]')
        try:
            response = self.client.get(
                self.endpoint,
                params={"q": query, "api_key": self.api_key, "num": self.num_results},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            console.print(f"[red]Search failed: {e}[/red]")
            return []
        except ValueError as e:
            console.print(f"[red]Search returned invalid JSON: {e}[/red]")
            return []

        results = payload.get("organic_results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            return []

        references = []
        for result in results:
            if not isinstance(result, dict):
                continue
            link = result.get("link")
            if not isinstance(link, str) or not link or self._is_blocked(link):
                continue
            title = result.get("title")
            if not isinstance(title, str) or not title.strip():
                title = link
            references.append(Reference(title=title, link=link))
            if len(references) >= self.max_references:
                break

        return references

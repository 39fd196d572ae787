"""Blog crawling and article extraction."""

from .article_extractor import ArticleExtractor, extract_content, print_extraction_summary
from .browser import BrowserSession, open_browser
from .crawler import BlogCrawler, select_batch
from .models import DiscoveryRecord, ExtractionResult

__all__ = [
    "ArticleExtractor",
    "BlogCrawler",
    "BrowserSession",
    "DiscoveryRecord",
    "ExtractionResult",
    "extract_content",
    "open_browser",
    "print_extraction_summary",
    "select_batch",
]

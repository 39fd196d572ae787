"""Data models for blogpipe."""

from .article import Article, ArticleState, DiscoveryRecord, Reference
from .run import Run

__all__ = ["Article", "ArticleState", "DiscoveryRecord", "Reference", "Run"]

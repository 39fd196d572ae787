"""Article model for scraped and augmented blog posts."""

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .base import DBModel


class ArticleState(str, Enum):
    """Augmentation state of a stored article.

    Only these two states are persisted. An article whose augmentation
    crashed half way is still PENDING and is picked up by the next run.
    """

    PENDING = "pending"
    AUGMENTED = "augmented"


class Reference(BaseModel):
    """A web page used as supplementary material for a rewrite."""

    title: str = Field(..., description="Search result title")
    link: str = Field(..., description="Search result URL")


class DiscoveryRecord(BaseModel):
    """Article found on a blog index page, before its content is fetched."""

    title: str = Field(..., description="Article title")
    url: str = Field(..., description="Absolute article URL, empty when the card had no link")
    date: Optional[str] = Field(None, description="Publish date as shown by the source")


class Article(DBModel):
    """Article model."""

    url: str = Field(..., description="Article URL, unique identity key")
    title: str = Field(..., description="Article headline")
    date: Optional[str] = Field(None, description="Source-reported publish date, as scraped")
    original_content: str = Field(..., description="Text exactly as scraped")
    content: str = Field(..., description="Body shown to readers")
    is_updated: bool = Field(False, description="Whether augmentation has completed")
    references: List[Reference] = Field(default_factory=list, description="Rewrite references")

    @property
    def state(self) -> ArticleState:
        """Augmentation state derived from the persisted flag."""
        return ArticleState.AUGMENTED if self.is_updated else ArticleState.PENDING

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Article":
        """Build an article from an ``articles`` table row."""
        data = dict(row)
        references = data.pop("references_json", None) or []
        if isinstance(references, str):
            references = json.loads(references)
        data["references"] = references
        return cls(**data)

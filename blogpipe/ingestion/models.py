"""Data models for ingestion."""

from typing import Optional

from pydantic import BaseModel, Field

from ..models import DiscoveryRecord

__all__ = ["DiscoveryRecord", "ExtractionResult"]


class ExtractionResult(BaseModel):
    """Outcome of extracting one discovered article."""

    url: str = Field(..., description="Article URL")
    title: str = Field(..., description="Article title")
    success: bool = Field(..., description="Whether content was extracted and stored")
    strategy: Optional[str] = Field(None, description="Content strategy that matched")
    is_new: bool = Field(False, description="Whether the URL was not stored before")
    error: Optional[str] = Field(None, description="Error message if skipped")

"""Run models for tracking pipeline executions."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .base import DBModel


class Run(DBModel):
    """Pipeline run model."""

    phase: str = Field(..., description="Pipeline phase (crawl, augment)")
    started_at: datetime = Field(..., description="When the run started")
    finished_at: Optional[datetime] = Field(None, description="When the run finished")
    status: str = Field("running", description="Run status (success, failed, running)")
    stats_json: Optional[Dict[str, Any]] = Field(None, description="Aggregate run statistics")

"""Crawl and augment pipelines."""

from .augment import AugmentationOrchestrator, AugmentOutcome, AugmentPipeline, build_llm_provider
from .crawl import CrawlPipeline
from .stages import PipelineStage

__all__ = [
    "AugmentOutcome",
    "AugmentPipeline",
    "AugmentationOrchestrator",
    "CrawlPipeline",
    "PipelineStage",
    "build_llm_provider",
]

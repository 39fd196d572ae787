"""Reference search, text extraction and article rewriting."""

from .llm_provider import LLMProvider, MockLLMProvider, OpenAIProvider
from .readable import ReferenceFetcher, extract_readable_text
from .rewriter import RewriteSynthesizer, build_context, build_rewrite_prompt, format_reference
from .search import SerpAPISearchClient

__all__ = [
    "LLMProvider",
    "MockLLMProvider",
    "OpenAIProvider",
    "ReferenceFetcher",
    "RewriteSynthesizer",
    "SerpAPISearchClient",
    "build_context",
    "build_rewrite_prompt",
    "extract_readable_text",
    "format_reference",
]

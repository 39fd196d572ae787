"""Article rewrite synthesis."""

from typing import Iterable, Tuple

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .llm_provider import LLMProvider

console = Console()

REFERENCE_MARKER = "--- REFERENCE: {title} ---"


def format_reference(title: str, text: str) -> str:
    """One reference section of the context blob."""
    return f"\n\n{REFERENCE_MARKER.format(title=title)}\n{text}"


def build_context(sections: Iterable[Tuple[str, str]]) -> str:
    """Concatenate (title, text) pairs into the context blob."""
    return "".join(format_reference(title, text) for title, text in sections)


def build_rewrite_prompt(original_text: str, context: str, max_original_chars: int = 1000) -> str:
    """Prompt asking the model to rewrite an article with web context."""
    excerpt = original_text[:max_original_chars]

    return f"""You are an expert editor.

Original Article: "{excerpt}..."

New Information from Web:
{context}

Task: Rewrite the original article to be more comprehensive using the new information.
Maintain a professional tone.
IMPORTANT: At the end, list the references used.
Return ONLY the article body text (Markdown format), with no commentary before or after it."""


class RewriteSynthesizer:
    """Produce a rewritten article body with an LLM."""

    def __init__(self, llm_provider: LLMProvider, max_original_chars: int = 1000) -> None:
        """
        Initialize rewrite synthesizer.

        Args:
            llm_provider: LLM provider used for the rewrite
            max_original_chars: Original text kept in the prompt
        """
        self.llm_provider = llm_provider
        self.max_original_chars = max_original_chars

    def rewrite(self, original_text: str, context: str) -> str:
        """
        Rewrite an article using reference context.

        Returns:
            Rewritten body, empty if the model returned nothing

        Raises:
            RewriteError: if the provider call fails
        """
        prompt = build_rewrite_prompt(original_text, context, self.max_original_chars)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Rewriting article...", total=None)
            return self.llm_provider.generate(prompt)

"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    dsn_env: Optional[str] = Field(
        "DATABASE_URL", description="Environment variable holding a full connection string"
    )
    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("blogpipe", description="Database name")
    user: str = Field("blogpipe_user", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class ContentStrategy(BaseModel):
    """One content selector tried by the article extractor."""

    name: str = Field(..., description="Strategy name for logs")
    selector: str = Field(..., description="CSS selector of the content container")


def default_content_strategies() -> List[ContentStrategy]:
    """Content containers in priority order."""
    return [
        ContentStrategy(name="entry-content", selector=".entry-content"),
        ContentStrategy(name="post-content", selector=".post-content"),
        ContentStrategy(name="article", selector="article"),
    ]


class SourceConfig(BaseModel):
    """Source blog site and its theme's CSS conventions."""

    base_url: str = Field("https://beyondchats.com/blogs/", description="Blog index URL")
    page_path: str = Field("page/{n}/", description="Pagination path relative to base_url")
    pagination_selector: str = Field(".page-numbers", description="Pagination controls")
    card_selector: str = Field("article.entry-card", description="Article card container")
    title_link_selector: str = Field(".entry-title a", description="Title link inside a card")
    date_selector: str = Field(".meta-date time", description="Date element inside a card")
    batch_size: int = Field(5, description="Articles extracted per crawl run", ge=1, le=100)
    content_strategies: List[ContentStrategy] = Field(default_factory=default_content_strategies)

    @field_validator("page_path")
    @classmethod
    def validate_page_path(cls, v: str) -> str:
        """Require the page number placeholder."""
        if "{n}" not in v:
            raise ValueError("page_path must contain '{n}'")
        return v

    def page_url(self, page_number: int) -> str:
        """URL of one index page."""
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        return base + self.page_path.format(n=page_number)


class SearchConfig(BaseModel):
    """Web search provider configuration."""

    endpoint: str = Field("https://serpapi.com/search.json", description="SerpAPI JSON endpoint")
    api_key_env: Optional[str] = Field("SERPAPI_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    num_results: int = Field(5, description="Results requested from the provider", ge=1, le=100)
    max_references: int = Field(2, description="References kept per article", ge=1, le=10)
    blocked_patterns: List[str] = Field(
        default_factory=lambda: ["youtube.com", ".pdf"],
        description="Links containing any of these are dropped",
    )


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field("openai", description="LLM provider (openai, mock)")
    model: str = Field("gpt-4o-mini", description="Model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for an OpenAI-compatible API")
    temperature: float = Field(0.4, ge=0.0, le=2.0)
    max_tokens: int = Field(2000, ge=1, le=16000)
    original_chars: int = Field(1000, description="Original text kept in the prompt", ge=1)


class HttpConfig(BaseModel):
    """Transport settings shared by fetchers."""

    timeout: float = Field(30.0, description="HTTP timeout in seconds", gt=0)
    navigation_timeout: float = Field(30.0, description="Browser navigation timeout in seconds", gt=0)
    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
        description="User-Agent sent when fetching reference pages",
    )
    reference_chars: int = Field(2000, description="Readable text kept per reference", ge=1)


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)

"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_DATA_FEED_URL = "https://www.cshub.com/rss/categories/data"
DEFAULT_ATTACKS_FEED_URL = "https://www.cshub.com/rss/categories/attacks"

DEFAULT_CONVERSION_URL = "https://api.rss2json.com/v1/api.json"
DEFAULT_DIRECT_PROXY_URL = "https://corsproxy.io/"
DEFAULT_WRAPPED_PROXY_URL = "https://api.allorigins.win/get"

SUPPORTED_LANGUAGES = ("en", "ar")


class FeedsConfig(BaseModel):
    """Source URL per news category."""

    data: str = Field(DEFAULT_DATA_FEED_URL, description="Data category RSS URL")
    attacks: str = Field(DEFAULT_ATTACKS_FEED_URL, description="Attacks category RSS URL")


class TransportConfig(BaseModel):
    """Retrieval strategy configuration."""

    timeout: float = Field(6.0, description="Per-strategy timeout in seconds", gt=0.0, le=120.0)
    conversion_url: str = Field(DEFAULT_CONVERSION_URL, description="RSS-to-JSON conversion endpoint")
    direct_proxy_url: str = Field(DEFAULT_DIRECT_PROXY_URL, description="Raw XML relay endpoint")
    wrapped_proxy_url: str = Field(DEFAULT_WRAPPED_PROXY_URL, description="JSON-wrapped relay endpoint")
    user_agent: str = Field("cyberfeed/0.1 (RSS aggregator)", description="User-Agent header")


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field("openai", description="LLM provider (openai, mock)")
    model: str = Field("gpt-3.5-turbo", description="Model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API")


class DisplayConfig(BaseModel):
    """Terminal display preferences."""

    page_size: int = Field(10, description="Items per page", ge=1, le=100)
    language: str = Field("en", description="Display language (en, ar)")

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Only languages with tag names are allowed."""
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language '{v}', expected one of {SUPPORTED_LANGUAGES}")
        return v


class ConfigModel(BaseModel):
    """Main configuration model."""

    feeds: FeedsConfig = Field(default_factory=FeedsConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

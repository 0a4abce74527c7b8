"""Data models for ingestion."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedCategory(str, Enum):
    """News categories aggregated by the application."""

    DATA = "data"
    ATTACKS = "attacks"


class FeedItem(BaseModel):
    """Canonical news entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field("", description="Item title")
    description: str = Field("", description="Raw, possibly HTML-bearing summary")
    content_snippet: str = Field("", alias="contentSnippet", description="Display summary")
    link: str = Field("", description="Item URL")
    pub_date: str = Field("", alias="pubDate", description="Publication date as published")
    guid: str = Field("", description="Stable identity, falls back to link")
    content: str = Field("", description="Full content, falls back to the snippet")

    @field_validator("*", mode="before")
    @classmethod
    def collapse_missing(cls, v: Any) -> Any:
        """Absent values become empty strings."""
        return "" if v is None else v


class Feed(BaseModel):
    """One RSS source after normalization."""

    model_config = ConfigDict(frozen=True)

    title: str = Field("", description="Channel title")
    description: str = Field("", description="Channel description")
    link: str = Field("", description="Channel link")
    items: List[FeedItem] = Field(default_factory=list, description="Items in source order")

    @field_validator("title", "description", "link", mode="before")
    @classmethod
    def collapse_missing(cls, v: Any) -> Any:
        """Absent values become empty strings."""
        return "" if v is None else v


class AggregateResult(BaseModel):
    """Combined outcome of one aggregation call.

    A category is ``None`` when every retrieval strategy failed for it. One
    ``None`` category is a partial failure; the other category stays usable.
    """

    model_config = ConfigDict(frozen=True)

    data: Optional[Feed] = Field(None, description="Data category feed")
    attacks: Optional[Feed] = Field(None, description="Attacks category feed")
    errors: Dict[str, str] = Field(
        default_factory=dict, description="Failure message per failed category"
    )

    def get(self, category: FeedCategory) -> Optional[Feed]:
        """Get the feed for a category."""
        return getattr(self, FeedCategory(category).value)

    @property
    def failed_categories(self) -> List[FeedCategory]:
        return [c for c in FeedCategory if self.get(c) is None]

    @property
    def is_empty(self) -> bool:
        """Whether no category could be fetched."""
        return len(self.failed_categories) == len(FeedCategory)

    @property
    def is_partial(self) -> bool:
        """Whether some, but not all, categories failed."""
        return 0 < len(self.failed_categories) < len(FeedCategory)

    @property
    def item_count(self) -> int:
        return sum(len(feed.items) for feed in (self.data, self.attacks) if feed)

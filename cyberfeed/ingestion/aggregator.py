"""Concurrent aggregation of the news categories."""

import asyncio
from typing import Dict, Mapping, Optional, Union

import httpx
from rich.console import Console

from ..config import Config
from ..config.models import DEFAULT_ATTACKS_FEED_URL, DEFAULT_DATA_FEED_URL
from .models import AggregateResult, Feed, FeedCategory
from .rss_fetcher import RSSFetcher

console = Console()

DEFAULT_SOURCES: Dict[FeedCategory, str] = {
    FeedCategory.DATA: DEFAULT_DATA_FEED_URL,
    FeedCategory.ATTACKS: DEFAULT_ATTACKS_FEED_URL,
}


class FeedAggregator:
    """Fetch every category concurrently, isolating per-category failure."""

    def __init__(
        self,
        fetcher: Optional[RSSFetcher] = None,
        sources: Optional[Mapping[Union[FeedCategory, str], str]] = None,
    ) -> None:
        """Initialize aggregator."""
        self.fetcher = fetcher or RSSFetcher()
        if sources is None:
            sources = DEFAULT_SOURCES
        # Accept plain category names ("data") as keys
        self.sources = {FeedCategory(k): v for k, v in sources.items()}

    @classmethod
    def from_config(
        cls,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        verbose: bool = False,
    ) -> "FeedAggregator":
        """Build an aggregator from the loaded configuration."""
        model = config.config
        fetcher = RSSFetcher.from_config(model.transport, transport=transport, verbose=verbose)
        sources = {
            FeedCategory.DATA: model.feeds.data,
            FeedCategory.ATTACKS: model.feeds.attacks,
        }
        return cls(fetcher=fetcher, sources=sources)

    async def fetch_all(self) -> AggregateResult:
        """
        Fetch all categories.

        Never raises for fetch failures: a category whose strategy chain is
        exhausted is returned as None and its error recorded in ``errors``.
        """
        categories = [c for c in FeedCategory if self.sources.get(c)]
        outcomes = await asyncio.gather(
            *(self.fetcher.fetch_feed(self.sources[c]) for c in categories),
            return_exceptions=True,
        )

        feeds: Dict[str, Optional[Feed]] = {c.value: None for c in FeedCategory}
        errors: Dict[str, str] = {}
        for category, outcome in zip(categories, outcomes):
            if isinstance(outcome, Feed):
                feeds[category.value] = outcome
            elif isinstance(outcome, Exception):
                errors[category.value] = str(outcome) or type(outcome).__name__
            else:
                # Cancellation and other BaseExceptions are not fetch failures
                raise outcome

        for category in FeedCategory:
            if category not in categories:
                errors[category.value] = "No source URL configured"

        return AggregateResult(
            data=feeds[FeedCategory.DATA.value],
            attacks=feeds[FeedCategory.ATTACKS.value],
            errors=errors,
        )

    def fetch_all_sync(self) -> AggregateResult:
        """Synchronous wrapper for fetch_all."""
        return asyncio.run(self.fetch_all())


def print_aggregate_summary(result: AggregateResult) -> None:
    """Print summary of aggregation results."""
    console.print(f"\n[bold]Feed Summary:[/bold]")
    for category in FeedCategory:
        feed = result.get(category)
        if feed is not None:
            console.print(f"  {category.value}: [green]{len(feed.items)} items[/green] ({feed.title or 'untitled'})")
        else:
            console.print(f"  {category.value}: [red]failed[/red]")
    console.print(f"  Total items: {result.item_count}")

    if result.errors:
        console.print(f"\n[bold red]Failed feeds:[/bold red]")
        for category, error in result.errors.items():
            console.print(f"  - {category}: {error}")

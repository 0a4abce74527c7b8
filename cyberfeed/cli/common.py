"""Helpers shared by CLI commands."""

from enum import Enum
from typing import List, Optional

import typer
from rich.console import Console

from ..config import Config
from ..ingestion import AggregateResult, FeedAggregator, FeedCategory

console = Console()


class CategoryChoice(str, Enum):
    """Category selection on the command line."""

    ALL = "all"
    DATA = "data"
    ATTACKS = "attacks"

    def categories(self) -> List[FeedCategory]:
        if self is CategoryChoice.ALL:
            return list(FeedCategory)
        return [FeedCategory(self.value)]


class LanguageChoice(str, Enum):
    """Display language on the command line."""

    EN = "en"
    AR = "ar"


def resolve_language(choice: Optional[LanguageChoice], config: Config) -> str:
    """Command line language, falling back to the configured one."""
    if choice is None:
        return config.config.display.language
    return choice.value


def load_feeds(config: Config, verbose: bool = False) -> AggregateResult:
    """Aggregate both categories, exiting when nothing could be fetched."""
    aggregator = FeedAggregator.from_config(config, verbose=verbose)

    with console.status("[bold]Fetching feeds...[/bold]"):
        result = aggregator.fetch_all_sync()

    if result.is_empty:
        console.print("[red]❌ No data available. Check your connection.[/red]")
        for category, error in result.errors.items():
            console.print(f"  - {category}: {error}")
        raise typer.Exit(1)

    for category in result.failed_categories:
        error = result.errors.get(category.value, "unknown error")
        console.print(f"[yellow]⚠️  {category.value} feed unavailable: {error}[/yellow]")

    return result

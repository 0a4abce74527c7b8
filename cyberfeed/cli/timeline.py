"""Timeline command implementation."""

from typing import Optional

import typer
from rich.table import Table

from ..config import Config
from ..insights import monthly_distribution
from .common import CategoryChoice, LanguageChoice, console, load_feeds, resolve_language

BAR_WIDTH = 40


def timeline_command(
    category: CategoryChoice = typer.Option(
        CategoryChoice.ALL,
        "--category",
        "-c",
        help="Category to chart",
    ),
    language: Optional[LanguageChoice] = typer.Option(None, "--language", "-l", help="Month label language (en, ar)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every retrieval attempt"),
) -> None:
    """Show how many items were published per month."""
    config = Config()
    language = resolve_language(language, config)

    result = load_feeds(config, verbose=verbose)

    for selected in category.categories():
        feed = result.get(selected)
        if feed is None:
            continue

        buckets = monthly_distribution(feed.items, language=language)
        if not buckets:
            console.print(f"[yellow]No dated {selected.value} items.[/yellow]")
            continue

        peak = max(bucket.count for bucket in buckets)
        table = Table(title=f"Publication timeline ({selected.value})")
        table.add_column("Month", style="cyan")
        table.add_column("Items", style="green", justify="right")
        table.add_column("")

        for bucket in buckets:
            width = max(1, round(bucket.count / peak * BAR_WIDTH))
            table.add_row(bucket.label, str(bucket.count), "█" * width)

        console.print(table)

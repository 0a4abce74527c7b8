"""Analyze command implementation."""

from typing import Optional

import typer
from rich.panel import Panel

from ..config import Config
from ..enrichment import AnalysisError, analyze_feed_item, get_llm_provider, user_error
from ..ingestion import FeedCategory
from .common import LanguageChoice, console, load_feeds, resolve_language


def analyze_command(
    index: int = typer.Option(..., "--index", "-i", help="Item number as listed by 'cyberfeed fetch'", min=1),
    category: FeedCategory = typer.Option(
        FeedCategory.ATTACKS,
        "--category",
        "-c",
        help="Category the item belongs to",
    ),
    language: Optional[LanguageChoice] = typer.Option(None, "--language", "-l", help="Analysis language (en, ar)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every retrieval attempt"),
) -> None:
    """Ask the language model for a risk analysis of one item."""
    config = Config()
    language = resolve_language(language, config)

    result = load_feeds(config, verbose=verbose)
    feed = result.get(category)
    if feed is None:
        console.print(f"[red]The {category.value} feed is unavailable.[/red]")
        raise typer.Exit(1)

    if index > len(feed.items):
        console.print(f"[red]Item {index} not found; the {category.value} feed has {len(feed.items)} items.[/red]")
        raise typer.Exit(1)

    item = feed.items[index - 1]
    provider = get_llm_provider(config.get_llm_config())

    try:
        if provider is None:
            raise user_error("auth", language)
        with console.status("[bold]Analyzing...[/bold]"):
            analysis = analyze_feed_item(provider, item, language=language)
    except AnalysisError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    console.print(Panel(analysis, title=item.title or "Untitled", subtitle=item.link, style="green"))

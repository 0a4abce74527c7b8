"""Fetch command implementation."""

from typing import Dict, List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..config import Config
from ..enrichment import Translator, get_llm_provider
from ..ingestion import Feed, FeedCategory, FeedItem
from ..insights import (
    extract_tags,
    filter_by_period,
    format_date,
    paginate,
    period_range,
    search_items,
    truncate_text,
)
from .common import CategoryChoice, LanguageChoice, console, load_feeds, resolve_language


def _render_table(
    category: FeedCategory,
    feed: Feed,
    rows: List[FeedItem],
    positions: Dict[int, int],
    language: str,
    translator: Optional[Translator],
) -> Table:
    table = Table(title=f"{feed.title or category.value} ({category.value})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Date", style="yellow")
    table.add_column("Title", style="cyan")
    table.add_column("Summary")
    table.add_column("Tags", style="magenta")

    for item in rows:
        title = item.title
        summary = item.content_snippet
        if translator is not None:
            translated = translator.translate_item(item, language)
            title, summary = translated.title, translated.description

        tags = ", ".join(
            f"[bold red]{tag.name}[/bold red]" if tag.highlight else tag.name
            for tag in extract_tags(item, language)
        )
        table.add_row(
            str(positions[id(item)] + 1),
            format_date(item.pub_date),
            escape(title),
            escape(truncate_text(summary)),
            tags,
        )

    return table


def fetch_command(
    category: CategoryChoice = typer.Option(
        CategoryChoice.ALL,
        "--category",
        "-c",
        help="Category to show",
    ),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter by title, description or tag"),
    period: str = typer.Option(
        "all",
        "--period",
        "-p",
        help="Date filter: all, this-month, last-month, 3-months, 6-months, year-YYYY",
    ),
    page: int = typer.Option(1, "--page", help="Page number", min=1),
    page_size: Optional[int] = typer.Option(None, "--page-size", help="Items per page", min=1, max=100),
    language: Optional[LanguageChoice] = typer.Option(None, "--language", "-l", help="Display language (en, ar)"),
    as_json: bool = typer.Option(False, "--json", help="Print the selected pages as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every retrieval attempt"),
) -> None:
    """Fetch both news categories and list their items."""
    config = Config()
    display = config.config.display
    page_size = page_size or display.page_size
    language = resolve_language(language, config)

    try:
        period_range(period)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--period")

    result = load_feeds(config, verbose=verbose)

    translator = None
    if language != "en" and not as_json:
        provider = get_llm_provider(config.get_llm_config())
        if provider is None:
            console.print("[dim]Translation disabled: no OpenAI API key configured.[/dim]")
        else:
            translator = Translator(provider)

    output = {}
    for selected in category.categories():
        feed = result.get(selected)
        if feed is None:
            continue

        positions = {id(item): index for index, item in enumerate(feed.items)}
        items = filter_by_period(search_items(feed.items, search or ""), period)
        current = paginate(items, page=page, page_size=page_size)

        if as_json:
            output[selected.value] = {
                "title": feed.title,
                "description": feed.description,
                "link": feed.link,
                "page": current.page,
                "total_pages": current.total_pages,
                "total_items": current.total_items,
                "items": [item.model_dump(by_alias=True) for item in current.items],
            }
            continue

        if not current.items:
            console.print(f"[yellow]No {selected.value} items match the current filters.[/yellow]")
            continue

        console.print(_render_table(selected, feed, current.items, positions, language, translator))
        console.print(
            f"[dim]Page {current.page}/{current.total_pages} - "
            f"{current.total_items} matching of {len(feed.items)} items[/dim]\n"
        )

    if as_json:
        console.print_json(data=output)

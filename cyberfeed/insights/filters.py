"""Search, date filtering and pagination over feed items."""

import math
import re
from typing import List, Optional, Sequence, Tuple

import pendulum
from pendulum import DateTime
from pydantic import BaseModel, Field

from ..ingestion.models import FeedItem
from .dates import parse_pub_date
from .tags import extract_tags, keyword_for_name

PERIODS = ("all", "this-month", "last-month", "3-months", "6-months")
_YEAR_PERIOD = re.compile(r"^year-(\d{4})$")


class Page(BaseModel):
    """One page of items."""

    items: List[FeedItem] = Field(default_factory=list, description="Items on this page")
    page: int = Field(1, description="1-based page number")
    page_size: int = Field(10, description="Items per page")
    total_items: int = Field(0, description="Items across all pages")
    total_pages: int = Field(0, description="Number of pages")

    @property
    def start(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def end(self) -> int:
        return min(self.start + self.page_size, self.total_items)


def search_items(items: Sequence[FeedItem], query: str) -> List[FeedItem]:
    """
    Filter items by a free-text query.

    Matches title and description, tag names in either language, and maps a
    localized tag name (e.g. Arabic) back to its English keyword.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(items)

    keyword = keyword_for_name(needle)
    matches = []
    for item in items:
        title = item.title.lower()
        description = (item.content_snippet or item.description).lower()
        if needle in title or needle in description:
            matches.append(item)
            continue
        if keyword and keyword in f"{title} {description}":
            matches.append(item)
            continue
        tag_names = [
            tag.name.lower()
            for language in ("en", "ar")
            for tag in extract_tags(item, language)
        ]
        if any(needle in name for name in tag_names):
            matches.append(item)
    return matches


def period_range(period: str, now: Optional[DateTime] = None) -> Optional[Tuple[DateTime, DateTime]]:
    """
    Resolve a period name to an inclusive (start, end) range.

    Returns None for "all". Raises ValueError for unknown periods.
    """
    now = now or pendulum.now()
    if period == "all":
        return None
    if period == "this-month":
        return now.start_of("month"), now.end_of("month")
    if period == "last-month":
        previous = now.subtract(months=1)
        return previous.start_of("month"), previous.end_of("month")
    if period == "3-months":
        return now.subtract(months=3).start_of("month"), now.end_of("month")
    if period == "6-months":
        return now.subtract(months=6).start_of("month"), now.end_of("month")

    match = _YEAR_PERIOD.match(period)
    if match:
        year = int(match.group(1))
        start = pendulum.datetime(year, 1, 1, tz=now.timezone)
        return start, start.end_of("year")

    raise ValueError(f"Unknown period '{period}', expected one of {PERIODS} or year-YYYY")


def filter_by_period(
    items: Sequence[FeedItem],
    period: str,
    now: Optional[DateTime] = None,
) -> List[FeedItem]:
    """Keep items published within the period; undated items only pass for "all"."""
    bounds = period_range(period, now)
    if bounds is None:
        return list(items)

    start, end = bounds
    kept = []
    for item in items:
        published = parse_pub_date(item.pub_date)
        if published is None:
            continue
        if start.date() <= published.date() <= end.date():
            kept.append(item)
    return kept


def paginate(items: Sequence[FeedItem], page: int = 1, page_size: int = 10) -> Page:
    """Slice items into a page; out-of-range page numbers are clamped."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")

    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)
    page = max(1, min(page, total_pages or 1))
    start = (page - 1) * page_size

    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )

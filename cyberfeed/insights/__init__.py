"""Consumers of normalized feeds: tags, filters and timeline."""

from .dates import format_date, parse_pub_date, truncate_text
from .filters import PERIODS, Page, filter_by_period, paginate, period_range, search_items
from .tags import Tag, extract_tags
from .timeline import MonthBucket, monthly_distribution

__all__ = [
    "Tag",
    "extract_tags",
    "Page",
    "PERIODS",
    "search_items",
    "filter_by_period",
    "period_range",
    "paginate",
    "MonthBucket",
    "monthly_distribution",
    "parse_pub_date",
    "format_date",
    "truncate_text",
]

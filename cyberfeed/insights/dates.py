"""Publication date helpers."""

from email.utils import parsedate_to_datetime
from typing import Optional

import pendulum
from pendulum import DateTime


def parse_pub_date(value: str) -> Optional[DateTime]:
    """
    Parse a feed date string.

    RSS dates are RFC 822; anything else is handed to pendulum's lenient
    parser. Returns None when the text is empty or unparseable.
    """
    text = (value or "").strip()
    if not text:
        return None

    try:
        return pendulum.instance(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        pass

    try:
        parsed = pendulum.parse(text, strict=False)
    except (ValueError, TypeError, OverflowError):
        return None
    return parsed if isinstance(parsed, DateTime) else None


def format_date(value: str) -> str:
    """Format a feed date as e.g. "Jan 1, 2024"."""
    if not value:
        return "N/A"
    parsed = parse_pub_date(value)
    if parsed is None:
        return value
    return parsed.format("MMM D, YYYY")


def truncate_text(text: str, max_length: int = 150) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."

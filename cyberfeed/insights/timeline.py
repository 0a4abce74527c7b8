"""Monthly distribution of feed items."""

from typing import Dict, Iterable, List

from pendulum import DateTime
from pydantic import BaseModel, Field

from ..ingestion.models import FeedItem
from .dates import parse_pub_date

ARABIC_MONTHS = [
    "يناير",
    "فبراير",
    "مارس",
    "أبريل",
    "مايو",
    "يونيو",
    "يوليو",
    "أغسطس",
    "سبتمبر",
    "أكتوبر",
    "نوفمبر",
    "ديسمبر",
]


class MonthBucket(BaseModel):
    """Item count for one calendar month."""

    label: str = Field(..., description="Display label, e.g. 'Jan 2024'")
    year: int = Field(..., description="Calendar year")
    month: int = Field(..., description="Calendar month (1-12)", ge=1, le=12)
    count: int = Field(0, description="Number of items published that month")


def month_label(date: DateTime, language: str = "en") -> str:
    if language == "ar":
        return f"{ARABIC_MONTHS[date.month - 1]} {date.year}"
    return date.format("MMM YYYY")


def monthly_distribution(items: Iterable[FeedItem], language: str = "en") -> List[MonthBucket]:
    """Count items per month, oldest month first. Undated items are skipped."""
    buckets: Dict[tuple, MonthBucket] = {}
    for item in items:
        published = parse_pub_date(item.pub_date)
        if published is None:
            continue
        key = (published.year, published.month)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = MonthBucket(
                label=month_label(published, language),
                year=published.year,
                month=published.month,
            )
            buckets[key] = bucket
        bucket.count += 1

    return [buckets[key] for key in sorted(buckets)]

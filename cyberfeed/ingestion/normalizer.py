"""Normalization of strategy payloads into the canonical Feed shape."""

from typing import Any, Dict, List, Union

from .errors import PayloadValidationError
from .models import Feed, FeedItem
from .xml_parser import parse_rss

# What a retrieval strategy hands back: an already normalized feed or raw XML
StrategyPayload = Union[Feed, str]

XML_MARKERS = ("<?xml", "<rss")


def has_xml_preamble(text: str) -> bool:
    """Check whether text looks like an XML/RSS document."""
    return any(marker in text for marker in XML_MARKERS)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def feed_from_conversion(data: Dict[str, Any]) -> Feed:
    """Map an RSS-to-JSON conversion response onto a Feed."""
    channel = data.get("feed")
    if not isinstance(channel, dict):
        channel = {}
    items: List[FeedItem] = []
    for entry in data.get("items") or []:
        if not isinstance(entry, dict):
            continue
        description = _text(entry.get("description")) or _text(entry.get("content"))
        link = _text(entry.get("link"))
        items.append(
            FeedItem(
                title=_text(entry.get("title")),
                description=description,
                content_snippet=description,
                link=link,
                pub_date=_text(entry.get("pubDate")),
                guid=_text(entry.get("guid")) or link,
                content=_text(entry.get("content")) or description,
            )
        )

    return Feed(
        title=_text(channel.get("title")),
        description=_text(channel.get("description")),
        link=_text(channel.get("link")),
        items=items,
    )


def normalize_payload(payload: StrategyPayload) -> Feed:
    """
    Turn whatever a strategy returned into a Feed.

    Raises:
        PayloadValidationError: If text does not look like XML
        ParseError: If the XML cannot be parsed
    """
    if isinstance(payload, Feed):
        return payload

    if isinstance(payload, str):
        if not has_xml_preamble(payload):
            raise PayloadValidationError("Response does not contain valid XML")
        return parse_rss(payload)

    raise PayloadValidationError(f"Unexpected result format: {type(payload).__name__}")

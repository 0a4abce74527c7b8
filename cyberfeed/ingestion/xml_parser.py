"""RSS 2.0 XML parsing into the canonical feed shape."""

import xml.etree.ElementTree as ET
from typing import Iterable, List, Optional

from .errors import ParseError
from .models import Feed, FeedItem

CONTENT_ENCODED = "{http://purl.org/rss/1.0/modules/content/}encoded"


def _local_name(tag: str) -> str:
    if not isinstance(tag, str):
        return ""
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def _element_text(elem: ET.Element) -> str:
    return "".join(elem.itertext()).strip()


def _child_text(parent: ET.Element, name: str) -> Optional[str]:
    """Text of the first direct child with the given tag, None when absent."""
    for child in parent:
        if child.tag == name:
            return _element_text(child)
    # RSS 1.0 puts the core elements in a namespace
    if "}" not in name:
        for child in parent:
            if _local_name(child.tag) == name:
                return _element_text(child)
    return None


def _find_channel(root: ET.Element) -> Optional[ET.Element]:
    for elem in root.iter():
        if _local_name(elem.tag) == "channel":
            return elem
    return None


def _iter_items(channel: ET.Element) -> Iterable[ET.Element]:
    for elem in channel.iter():
        if elem is not channel and _local_name(elem.tag) == "item":
            yield elem


def _parse_item(node: ET.Element) -> FeedItem:
    title = _child_text(node, "title")
    description = _child_text(node, "description")
    link = _child_text(node, "link")
    guid = _child_text(node, "guid")
    encoded = _child_text(node, CONTENT_ENCODED)

    # Empty strings fall back the same way as absent elements
    return FeedItem(
        title=title,
        description=description,
        content_snippet=description,
        link=link,
        pub_date=_child_text(node, "pubDate"),
        guid=guid or link,
        content=encoded or description,
    )


def parse_rss(xml_text: str) -> Feed:
    """
    Parse raw RSS XML into a Feed.

    Args:
        xml_text: RSS document text

    Returns:
        Feed with channel metadata and items in document order

    Raises:
        ParseError: If the document is not well-formed or has no channel
    """
    text = (xml_text or "").lstrip("\ufeff \t\r\n")
    try:
        root = ET.fromstring(text)
    except (ET.ParseError, ValueError) as e:
        raise ParseError(f"Failed to parse XML: {e}") from e

    channel = _find_channel(root)
    if channel is None:
        raise ParseError("Invalid RSS feed: no channel found")

    items: List[FeedItem] = [_parse_item(node) for node in _iter_items(channel)]

    return Feed(
        title=_child_text(channel, "title"),
        description=_child_text(channel, "description"),
        link=_child_text(channel, "link"),
        items=items,
    )

"""Tests for payload normalization."""

import pytest

from cyberfeed.ingestion import (
    Feed,
    FeedItem,
    ParseError,
    PayloadValidationError,
    feed_from_conversion,
    has_xml_preamble,
    normalize_payload,
    parse_rss,
)

from conftest import conversion_payload


def test_has_xml_preamble():
    assert has_xml_preamble('<?xml version="1.0"?><rss/>')
    assert has_xml_preamble("<rss version='2.0'></rss>")
    assert not has_xml_preamble("<html><body>blocked</body></html>")
    assert not has_xml_preamble("")


def test_feed_from_conversion_maps_items():
    feed = feed_from_conversion(conversion_payload())

    assert feed.title == "X"
    assert feed.description == "Converted feed"
    item = feed.items[0]
    assert item.title == "T1"
    assert item.pub_date == "2024-01-01"
    assert item.description == "First item"
    assert item.content_snippet == "First item"
    assert item.content == "<p>First item in full</p>"
    assert item.guid == "t1"


def test_feed_from_conversion_fallbacks():
    data = conversion_payload(
        items=[
            {"title": "Only content", "content": "Body", "link": "https://example.com/a"},
            {"title": None, "description": "Desc only", "guid": ""},
        ]
    )
    first, second = feed_from_conversion(data).items

    assert first.description == first.content_snippet == "Body"
    assert first.content == "Body"
    assert first.guid == "https://example.com/a"
    assert second.title == ""
    assert second.content == "Desc only"
    assert second.guid == ""
    assert second.pub_date == ""


def test_feed_from_conversion_without_feed_block():
    feed = feed_from_conversion({"status": "ok", "items": None})

    assert feed == Feed()


def test_normalize_payload_passes_feeds_through():
    feed = Feed(title="Ready", items=[FeedItem(title="a")])

    assert normalize_payload(feed) is feed


def test_normalize_payload_parses_xml(sample_rss):
    assert normalize_payload(sample_rss) == parse_rss(sample_rss)


def test_normalize_payload_rejects_non_xml_text():
    with pytest.raises(PayloadValidationError):
        normalize_payload("<html>Access denied</html>")


def test_normalize_payload_propagates_parse_errors():
    with pytest.raises(ParseError):
        normalize_payload("<rss><item>no channel</item></rss>")


def test_normalize_payload_rejects_other_shapes():
    with pytest.raises(PayloadValidationError, match="Unexpected result format"):
        normalize_payload({"items": []})


def test_feed_item_collapses_none():
    item = FeedItem(title=None, pubDate=None, contentSnippet="s")

    assert item.title == ""
    assert item.pub_date == ""
    assert item.content_snippet == "s"
    assert item.model_dump(by_alias=True)["contentSnippet"] == "s"

"""Shared fixtures for cyberfeed tests."""

from typing import Callable, Dict

import httpx
import pytest

CONVERSION_HOST = "api.rss2json.com"
DIRECT_PROXY_HOST = "corsproxy.io"
WRAPPED_PROXY_HOST = "api.allorigins.win"

DATA_URL = "https://www.cshub.com/rss/categories/data"
ATTACKS_URL = "https://www.cshub.com/rss/categories/attacks"

SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>Cyber Security Hub - Data</title>
    <atom:link href="https://www.cshub.com/rss/categories/data" rel="self" type="application/rss+xml"/>
    <link>https://www.cshub.com</link>
    <description>Data security news</description>
    <item>
      <title>Ransomware gang leaks hospital records</title>
      <link>https://www.cshub.com/attacks/news/ransomware-hospital</link>
      <description><![CDATA[<p>A ransomware attack exposed patient data.</p>]]></description>
      <pubDate>Mon, 15 Jan 2024 10:00:00 GMT</pubDate>
      <guid>cshub-1001</guid>
      <content:encoded><![CDATA[<p>Full story about the ransomware attack.</p>]]></content:encoded>
    </item>
    <item>
      <title>New phishing kit targets banks</title>
      <link>https://www.cshub.com/data/news/phishing-kit</link>
      <description>Researchers found a phishing kit.</description>
      <pubDate>Tue, 20 Feb 2024 08:30:00 GMT</pubDate>
    </item>
    <item>
      <title>Quarterly roundup</title>
    </item>
  </channel>
</rss>
"""


def conversion_payload(title: str = "X", items=None) -> Dict:
    """Response body of the RSS-to-JSON conversion service."""
    if items is None:
        items = [
            {
                "title": "T1",
                "pubDate": "2024-01-01",
                "link": "https://example.com/t1",
                "guid": "t1",
                "description": "First item",
                "content": "<p>First item in full</p>",
            }
        ]
    return {
        "status": "ok",
        "feed": {"title": title, "description": "Converted feed", "link": "https://example.com"},
        "items": items,
    }


def make_transport(routes: Dict[str, Callable]) -> httpx.MockTransport:
    """Mock transport dispatching requests on host; unknown hosts get a 404."""

    async def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.host)
        if route is None:
            return httpx.Response(404, text="not found")
        response = route(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    return httpx.MockTransport(handler)


@pytest.fixture
def sample_rss() -> str:
    return SAMPLE_RSS

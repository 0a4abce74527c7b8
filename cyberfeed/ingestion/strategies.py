"""Retrieval strategies for RSS feeds.

Each strategy reaches the feed through a different upstream service and hands
back either a normalized Feed or raw XML text for the parser.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..config.models import (
    DEFAULT_CONVERSION_URL,
    DEFAULT_DIRECT_PROXY_URL,
    DEFAULT_WRAPPED_PROXY_URL,
)
from .errors import FetchTimeoutError, PayloadValidationError, TransportError
from .normalizer import StrategyPayload, feed_from_conversion, has_xml_preamble


class FetchStrategy(ABC):
    """Abstract base class for feed retrieval strategies."""

    name: str = "strategy"

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint

    @abstractmethod
    async def fetch(self, client: httpx.AsyncClient, feed_url: str) -> StrategyPayload:
        """
        Retrieve a feed through this strategy.

        Args:
            client: HTTP client to issue requests with
            feed_url: URL of the RSS feed

        Returns:
            A normalized Feed, or raw XML text to be parsed
        """
        pass

    async def _get(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Issue a GET, mapping httpx failures onto feed errors."""
        try:
            response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}") from e

        if not response.is_success:
            raise TransportError(f"HTTP {response.status_code}", status_code=response.status_code)
        return response

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.endpoint!r})"


class ConversionServiceStrategy(FetchStrategy):
    """RSS-to-JSON conversion API; bypasses the XML parser."""

    name = "conversion"

    def __init__(self, endpoint: str = DEFAULT_CONVERSION_URL) -> None:
        super().__init__(endpoint)

    async def fetch(self, client: httpx.AsyncClient, feed_url: str) -> StrategyPayload:
        response = await self._get(client, self.endpoint, params={"rss_url": feed_url})
        try:
            data = response.json()
        except ValueError as e:
            raise PayloadValidationError(f"Invalid JSON from conversion service: {e}") from e

        if not isinstance(data, dict) or data.get("status") != "ok":
            raise PayloadValidationError("API returned error")

        return feed_from_conversion(data)


class DirectProxyStrategy(FetchStrategy):
    """URL-rewriting proxy that relays the raw XML."""

    name = "direct-proxy"

    def __init__(self, endpoint: str = DEFAULT_DIRECT_PROXY_URL) -> None:
        super().__init__(endpoint)

    def build_url(self, feed_url: str) -> str:
        return f"{self.endpoint}?{quote(feed_url, safe='')}"

    async def fetch(self, client: httpx.AsyncClient, feed_url: str) -> StrategyPayload:
        response = await self._get(client, self.build_url(feed_url))
        text = response.text
        if not has_xml_preamble(text):
            raise PayloadValidationError("Not valid XML")
        return text


class WrappedProxyStrategy(FetchStrategy):
    """Proxy returning JSON with the original document under ``contents``."""

    name = "wrapped-proxy"

    def __init__(self, endpoint: str = DEFAULT_WRAPPED_PROXY_URL) -> None:
        super().__init__(endpoint)

    async def fetch(self, client: httpx.AsyncClient, feed_url: str) -> StrategyPayload:
        response = await self._get(client, self.endpoint, params={"url": feed_url})
        text = response.text
        if not text.strip().startswith("{"):
            raise PayloadValidationError("Not JSON")

        try:
            data = json.loads(text)
        except ValueError as e:
            raise PayloadValidationError(f"Invalid JSON from proxy: {e}") from e

        contents = data.get("contents") if isinstance(data, dict) else None
        if not contents or not isinstance(contents, str):
            raise PayloadValidationError("No contents in response")
        return contents


def default_strategies(
    conversion_url: str = DEFAULT_CONVERSION_URL,
    direct_proxy_url: str = DEFAULT_DIRECT_PROXY_URL,
    wrapped_proxy_url: str = DEFAULT_WRAPPED_PROXY_URL,
) -> List[FetchStrategy]:
    """Build the strategy list in fallback order."""
    return [
        ConversionServiceStrategy(conversion_url),
        DirectProxyStrategy(direct_proxy_url),
        WrappedProxyStrategy(wrapped_proxy_url),
    ]

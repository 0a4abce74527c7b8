"""RSS feed fetcher with fallback-chained retrieval."""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import httpx
from rich.console import Console

from ..config.models import TransportConfig
from .errors import AllStrategiesFailedError, FetchTimeoutError
from .models import Feed
from .normalizer import normalize_payload
from .strategies import FetchStrategy, default_strategies

console = Console()

DEFAULT_TIMEOUT = 6.0
DEFAULT_USER_AGENT = "cyberfeed/0.1 (RSS aggregator)"


class ChainState(str, Enum):
    """Progress of a strategy chain."""

    PENDING = "pending"
    TRYING = "trying"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class FetchAttempt:
    """Outcome of one strategy attempt."""

    strategy: str
    success: bool
    error: Optional[str] = None
    duration: float = 0.0


class StrategyChain:
    """Try strategies in order until one yields a feed.

    Attempts are strictly sequential and each one is bounded by ``timeout``.
    A timed out attempt is cancelled before the next strategy starts.
    """

    def __init__(
        self,
        strategies: Sequence[FetchStrategy],
        timeout: float = DEFAULT_TIMEOUT,
        verbose: bool = False,
    ) -> None:
        self.strategies = list(strategies)
        self.timeout = timeout
        self.verbose = verbose
        self.state = ChainState.PENDING
        self.current: Optional[int] = None
        self.attempts: List[FetchAttempt] = []
        self.last_error: Optional[BaseException] = None

    async def _attempt(self, strategy: FetchStrategy, client: httpx.AsyncClient, url: str) -> Feed:
        try:
            payload = await asyncio.wait_for(strategy.fetch(client, url), timeout=self.timeout)
        except FetchTimeoutError:
            raise
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(f"Request timeout after {self.timeout:g}s") from e
        return normalize_payload(payload)

    async def run(self, client: httpx.AsyncClient, url: str) -> Feed:
        """
        Run the chain for one feed URL.

        Returns:
            The first feed any strategy produced

        Raises:
            The last strategy error once every strategy has failed
        """
        for index, strategy in enumerate(self.strategies):
            self.state = ChainState.TRYING
            self.current = index
            if self.verbose:
                console.print(f"[dim]Trying method {index + 1} ({strategy.name}) for {url}[/dim]")

            started = time.monotonic()
            try:
                feed = await self._attempt(strategy, client, url)
            except Exception as e:
                self.last_error = e
                self.attempts.append(
                    FetchAttempt(
                        strategy=strategy.name,
                        success=False,
                        error=str(e) or type(e).__name__,
                        duration=time.monotonic() - started,
                    )
                )
                if self.verbose:
                    console.print(f"[yellow]Method {index + 1} failed: {e}[/yellow]")
                continue

            self.attempts.append(
                FetchAttempt(strategy=strategy.name, success=True, duration=time.monotonic() - started)
            )
            self.state = ChainState.SUCCEEDED
            if self.verbose:
                console.print(
                    f"[dim]Fetched {feed.title or url} via {strategy.name}: {len(feed.items)} items[/dim]"
                )
            return feed

        self.state = ChainState.EXHAUSTED
        if self.last_error is not None:
            raise self.last_error
        raise AllStrategiesFailedError("All methods failed")


class RSSFetcher:
    """Fetch RSS feeds through an ordered list of retrieval strategies."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        strategies: Optional[Sequence[FetchStrategy]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        verbose: bool = False,
    ) -> None:
        """
        Initialize RSS fetcher.

        Args:
            timeout: Per-strategy deadline in seconds
            strategies: Strategies in fallback order (defaults to all three)
            transport: Custom httpx transport (for testing)
            user_agent: User-Agent header sent upstream
            verbose: Print each attempt to the console
        """
        self.timeout = timeout
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.transport = transport
        self.user_agent = user_agent
        self.verbose = verbose

    @classmethod
    def from_config(
        cls,
        transport_config: TransportConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        verbose: bool = False,
    ) -> "RSSFetcher":
        """Build a fetcher from transport configuration."""
        return cls(
            timeout=transport_config.timeout,
            strategies=default_strategies(
                conversion_url=transport_config.conversion_url,
                direct_proxy_url=transport_config.direct_proxy_url,
                wrapped_proxy_url=transport_config.wrapped_proxy_url,
            ),
            transport=transport,
            user_agent=transport_config.user_agent,
            verbose=verbose,
        )

    def new_chain(self) -> StrategyChain:
        return StrategyChain(self.strategies, timeout=self.timeout, verbose=self.verbose)

    async def fetch_feed(self, url: str) -> Feed:
        """Fetch and normalize a single RSS feed."""
        chain = self.new_chain()
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
            transport=self.transport,
        ) as client:
            return await chain.run(client, url)

    def fetch_feed_sync(self, url: str) -> Feed:
        """Synchronous wrapper for fetch_feed."""
        return asyncio.run(self.fetch_feed(url))

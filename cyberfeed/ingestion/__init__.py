"""RSS retrieval, parsing and aggregation."""

from .aggregator import FeedAggregator, print_aggregate_summary
from .errors import (
    AllStrategiesFailedError,
    FeedError,
    FetchTimeoutError,
    ParseError,
    PayloadValidationError,
    TransportError,
)
from .models import AggregateResult, Feed, FeedCategory, FeedItem
from .normalizer import feed_from_conversion, has_xml_preamble, normalize_payload
from .rss_fetcher import ChainState, FetchAttempt, RSSFetcher, StrategyChain
from .strategies import (
    ConversionServiceStrategy,
    DirectProxyStrategy,
    FetchStrategy,
    WrappedProxyStrategy,
    default_strategies,
)
from .xml_parser import parse_rss

__all__ = [
    "FeedAggregator",
    "RSSFetcher",
    "StrategyChain",
    "ChainState",
    "FetchAttempt",
    "FetchStrategy",
    "ConversionServiceStrategy",
    "DirectProxyStrategy",
    "WrappedProxyStrategy",
    "default_strategies",
    "AggregateResult",
    "Feed",
    "FeedCategory",
    "FeedItem",
    "parse_rss",
    "normalize_payload",
    "feed_from_conversion",
    "has_xml_preamble",
    "print_aggregate_summary",
    "FeedError",
    "TransportError",
    "FetchTimeoutError",
    "PayloadValidationError",
    "ParseError",
    "AllStrategiesFailedError",
]

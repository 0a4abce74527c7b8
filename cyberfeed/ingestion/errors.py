"""Errors raised while fetching and parsing feeds."""

from typing import Optional


class FeedError(Exception):
    """Base class for feed ingestion errors."""


class TransportError(FeedError):
    """HTTP request failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchTimeoutError(FeedError, TimeoutError):
    """A strategy did not complete before its deadline."""


class PayloadValidationError(FeedError):
    """Response body did not have the expected shape or content."""


class ParseError(FeedError):
    """RSS document is malformed or has no channel."""


class AllStrategiesFailedError(FeedError):
    """Strategy chain had nothing to try."""

"""Market data feed base definitions and abstract interface.

This module defines the error taxonomy and the protocol that quote
provider implementations follow.
"""
from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


class FeedError(Exception):
    """Base class for failures while obtaining the price series."""


class NetworkError(FeedError):
    """Quote provider unreachable, timed out, or answered with a non-2xx status.

    Attributes:
        status_code: HTTP status code when a response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(FeedError):
    """Response body is malformed or does not have the expected shape."""


@runtime_checkable
class QuoteProvider(Protocol):
    """Source of raw intraday response bodies for one symbol."""

    def fetch_intraday(self, symbol: str) -> str:
        """Return the raw response body for ``symbol``.

        Implementations raise ``NetworkError`` when the body cannot be
        retrieved.
        """
        ...

"""Market data feed: quote fetching and response parsing."""
from feed.base import FeedError, NetworkError, ParseError, QuoteProvider
from feed.client import AlphaVantageClient, mask_api_key
from feed.parser import parse_intraday_series

__all__ = [
    # Base types
    "FeedError",
    "NetworkError",
    "ParseError",
    "QuoteProvider",
    # Implementations
    "AlphaVantageClient",
    "mask_api_key",
    "parse_intraday_series",
]

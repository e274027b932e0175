"""Alpha Vantage intraday quote client.

This module provides the HTTP fetch for the ``TIME_SERIES_INTRADAY``
endpoint. It only transports the body; parsing lives in ``feed.parser``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.exceptions import RequestException, Timeout

from feed.base import NetworkError

DEFAULT_BASE_URL = "https://www.alphavantage.co/query"
DEFAULT_FEED_INTERVAL = "1min"
DEFAULT_OUTPUTSIZE = "compact"
DEFAULT_TIMEOUT = 10.0


def mask_api_key(api_key: str) -> str:
    """Return ``api_key`` with everything but the last four characters hidden."""
    if len(api_key) <= 4:
        return "*" * len(api_key)
    return "*" * (len(api_key) - 4) + api_key[-4:]


class AlphaVantageClient:
    """QuoteProvider implementation for Alpha Vantage."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        interval: str = DEFAULT_FEED_INTERVAL,
        outputsize: str = DEFAULT_OUTPUTSIZE,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self.interval = interval
        self._outputsize = outputsize
        self._timeout = timeout
        self._session = session or requests.Session()

    def build_params(self, symbol: str) -> Dict[str, Any]:
        return {
            "function": "TIME_SERIES_INTRADAY",
            "symbol": symbol,
            "interval": self.interval,
            "outputsize": self._outputsize,
            "apikey": self._api_key,
        }

    def fetch_intraday(self, symbol: str) -> str:
        """Fetch the raw intraday JSON body for ``symbol``.

        Args:
            symbol: Ticker symbol, e.g. "IBM".

        Returns:
            Response body as text.

        Raises:
            ValueError: If ``symbol`` is blank.
            NetworkError: On connection failures, timeouts and non-2xx responses.
        """
        symbol = symbol.strip()
        if not symbol:
            raise ValueError("Symbol must not be empty.")

        params = self.build_params(symbol)
        logging.debug(
            "GET %s symbol=%s interval=%s apikey=%s",
            self._base_url,
            symbol,
            self.interval,
            mask_api_key(self._api_key),
        )
        try:
            response = self._session.get(self._base_url, params=params, timeout=self._timeout)
        except Timeout as exc:
            raise NetworkError(
                f"Timed out after {self._timeout:.1f}s fetching {symbol} from quote provider"
            ) from exc
        except RequestException as exc:
            raise NetworkError(f"Network error fetching {symbol}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise NetworkError(
                f"Quote provider returned HTTP {response.status_code} for {symbol}",
                status_code=response.status_code,
            )
        return response.text

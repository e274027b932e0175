#!/usr/bin/env python3
"""
Single-symbol time series monitor.

Each cycle fetches the intraday series for one symbol, replaces the
in-memory store, evaluates the indicator set and prints a report, then
sleeps for the configured interval.

Architecture:
- feed/: quote fetching (requests) and response parsing (pandas)
- strategy/series.py: newest-first price store
- strategy/indicators.py: indicator engine
- strategy/snapshot.py: per-cycle indicator snapshot
- display/formatters.py: console report rendering
- monitor_config.py: environment configuration
- cli/main.py: interactive entry point
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from feed.base import FeedError, ParseError, QuoteProvider
from feed.parser import parse_intraday_series
from display.formatters import build_analysis_report
from strategy.series import SeriesStore
from strategy.snapshot import build_indicator_snapshot
from cli.output import print_error, print_report


class SeriesMonitor:
    """Poll loop owning the single series store for one symbol."""

    def __init__(
        self,
        symbol: str,
        provider: QuoteProvider,
        interval_seconds: int,
        *,
        feed_interval: str = "1min",
        sleep: Callable[[float], None] = time.sleep,
        emit: Callable[[str], None] = print_report,
        emit_error: Callable[[str], None] = print_error,
        color: bool = True,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("Update interval must be a positive number of seconds.")
        self.symbol = symbol.strip().upper()
        if not self.symbol:
            raise ValueError("Symbol must not be empty.")
        self.provider = provider
        self.interval_seconds = interval_seconds
        self.feed_interval = feed_interval
        self.store = SeriesStore()
        self._sleep = sleep
        self._emit = emit
        self._emit_error = emit_error
        self._color = color

    def refresh(self) -> int:
        """Fetch, parse and replace the store; return the new point count.

        Raises:
            NetworkError: When the provider cannot be reached.
            ParseError: When the body is malformed or holds no points.
        """
        raw = self.provider.fetch_intraday(self.symbol)
        points = parse_intraday_series(raw, self.feed_interval)
        if not points:
            raise ParseError(f"Response for {self.symbol} contained no price points")
        self.store.replace(points)
        return self.store.size()

    def run_cycle(self) -> Dict[str, Any]:
        """Run one fetch/compute/print cycle and return the snapshot."""
        size = self.refresh()
        logging.debug("Series for %s holds %d points", self.symbol, size)
        snapshot = build_indicator_snapshot(self.symbol, self.store)
        self._emit(
            build_analysis_report(snapshot, self.interval_seconds, color=self._color)
        )
        return snapshot

    def run_forever(self, max_cycles: Optional[int] = None) -> int:
        """Repeat cycles until interrupted or ``max_cycles`` have run.

        Feed failures abort only the current cycle: they are logged and
        reported, the previous series is kept, and the loop sleeps before
        retrying. Returns the number of cycles attempted, failed ones
        included. Ctrl-C emits a shutdown notice and stops the loop.
        """
        cycles = 0
        logging.info(
            "Monitoring %s every %d seconds (feed interval %s)",
            self.symbol,
            self.interval_seconds,
            self.feed_interval,
        )
        while max_cycles is None or cycles < max_cycles:
            try:
                cycles += 1
                try:
                    self.run_cycle()
                except FeedError as exc:
                    logging.error("Cycle %d for %s failed: %s", cycles, self.symbol, exc)
                    self._emit_error(
                        f"{exc} (retrying in {self.interval_seconds} seconds)"
                    )
                if max_cycles is not None and cycles >= max_cycles:
                    break
                self._sleep(self.interval_seconds)
            except KeyboardInterrupt:
                self._emit("\nShutting down monitor...")
                break
        return cycles

"""In-memory price history for the monitored symbol.

The store keeps two parallel newest-first sequences (timestamps and closes)
that are always replaced together. Position 0 is the most recent point.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

import numpy as np
import pandas as pd


class OutOfRangeError(IndexError):
    """Raised when a position beyond the stored history is requested."""


@dataclass(frozen=True, slots=True)
class PricePoint:
    """Single close observation.

    Attributes:
        timestamp: Milliseconds since the Unix epoch.
        close: Close price, finite and never negative.
    """

    timestamp: int
    close: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.close):
            raise ValueError(f"Close price must be finite, got {self.close}")
        if self.close < 0:
            raise ValueError(f"Close price must be non-negative, got {self.close}")


class SeriesStore:
    """Newest-first price series, replaced wholesale on every fetch."""

    def __init__(self) -> None:
        self._timestamps: Tuple[int, ...] = ()
        self._prices: Tuple[float, ...] = ()

    def replace(self, points: Iterable[PricePoint]) -> None:
        """Swap in a new newest-first series.

        The new sequences are fully built before assignment so a failure
        while consuming ``points`` leaves the previous contents in place.
        """
        timestamps: List[int] = []
        prices: List[float] = []
        for point in points:
            timestamps.append(int(point.timestamp))
            prices.append(float(point.close))
        self._timestamps, self._prices = tuple(timestamps), tuple(prices)

    def size(self) -> int:
        return len(self._prices)

    def __len__(self) -> int:
        return self.size()

    def at(self, index: int) -> PricePoint:
        """Return the point at ``index`` (0 = most recent)."""
        if index < 0 or index >= self.size():
            raise OutOfRangeError(
                f"Position {index} out of range for series of size {self.size()}"
            )
        return PricePoint(timestamp=self._timestamps[index], close=self._prices[index])

    def latest(self) -> PricePoint:
        return self.at(0)

    def closes(self, period: int) -> np.ndarray:
        """Return the ``period`` most recent closes, newest first."""
        return np.array(self._prices[:period], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame with ``timestamp``/``close`` columns."""
        return pd.DataFrame(
            {
                "timestamp": pd.to_datetime(list(self._timestamps), unit="ms", utc=True),
                "close": list(self._prices),
            }
        )

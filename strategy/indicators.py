"""Technical indicator calculations.

This module provides functions for calculating the indicators shown on
every poll cycle: SMA, EMA, WMA, standard deviation, Bollinger bands,
trend classification and RSI. Every function reads the ``period`` most
recent closes from a newest-first ``SeriesStore`` and returns the
``INSUFFICIENT_DATA`` sentinel (0.0) when the store is too short.
"""
from __future__ import annotations

from enum import Enum

import numpy as np

from strategy.series import SeriesStore

# Returned instead of raising when the window exceeds the available history.
INSUFFICIENT_DATA: float = 0.0


class IndicatorError(Exception):
    """Base class for indicator computation failures."""


class ZeroLossError(IndicatorError, ZeroDivisionError):
    """RSI window contains no losing periods, so RS is undefined.

    Attributes:
        avg_gain: Average gain over the window; 0.0 means the window is flat.
        period: RSI period that was requested.
    """

    def __init__(self, avg_gain: float, period: int) -> None:
        self.avg_gain = avg_gain
        self.period = period
        super().__init__(
            f"{period}-period RSI undefined: average loss is zero "
            f"(average gain {avg_gain:.6f})"
        )


class Trend(str, Enum):
    UPTREND = "Uptrend"
    DOWNTREND = "Downtrend"
    SIDEWAYS = "Sideways"
    INSUFFICIENT_DATA = "Insufficient data"


def _check_period(period: int) -> None:
    if period <= 0:
        raise ValueError(f"Period must be a positive integer, got {period}")


def _has_window(store: SeriesStore, period: int) -> bool:
    _check_period(period)
    return store.size() >= period


def simple_moving_average(store: SeriesStore, period: int) -> float:
    """Arithmetic mean of the ``period`` most recent closes."""
    if not _has_window(store, period):
        return INSUFFICIENT_DATA
    return float(np.sum(store.closes(period)) / period)


def exponential_moving_average(store: SeriesStore, period: int) -> float:
    """EMA seeded with the latest close and walked toward older closes.

    The recurrence runs over positions 1..period-1 in index order, i.e.
    from newest to oldest. This keeps output identical to the reference
    analyzer, which differs from the usual oldest-to-newest EMA.
    """
    if not _has_window(store, period):
        return INSUFFICIENT_DATA
    closes = store.closes(period)
    alpha = 2.0 / (period + 1)
    ema = float(closes[0])
    for price in closes[1:]:
        ema = alpha * float(price) + (1 - alpha) * ema
    return ema


def wma_weights(period: int) -> np.ndarray:
    """Weights for positions 0..period-1: ``period`` down to 1."""
    _check_period(period)
    return np.arange(period, 0, -1, dtype=float)


def weighted_moving_average(store: SeriesStore, period: int) -> float:
    """Linearly weighted mean giving the most recent close the largest weight."""
    if not _has_window(store, period):
        return INSUFFICIENT_DATA
    weights = wma_weights(period)
    return float(np.dot(store.closes(period), weights) / weights.sum())


def standard_deviation(store: SeriesStore, period: int) -> float:
    """Population standard deviation of the window around its SMA."""
    if not _has_window(store, period):
        return INSUFFICIENT_DATA
    mean = simple_moving_average(store, period)
    diffs = store.closes(period) - mean
    return float(np.sqrt(np.sum(diffs ** 2) / period))


def bollinger_band(
    store: SeriesStore,
    period: int,
    multiplier: float,
    upper: bool,
) -> float:
    """Return the upper or lower Bollinger band (SMA +/- multiplier * SD)."""
    sma = simple_moving_average(store, period)
    std_dev = standard_deviation(store, period)
    if upper:
        return sma + multiplier * std_dev
    return sma - multiplier * std_dev


def detect_trend(store: SeriesStore, short_period: int, long_period: int) -> Trend:
    """Classify the trend by comparing a short SMA against a long SMA."""
    if not _has_window(store, long_period):
        return Trend.INSUFFICIENT_DATA

    short_ma = simple_moving_average(store, short_period)
    long_ma = simple_moving_average(store, long_period)

    if short_ma > long_ma:
        return Trend.UPTREND
    if short_ma < long_ma:
        return Trend.DOWNTREND
    return Trend.SIDEWAYS


def relative_strength_index(store: SeriesStore, period: int) -> float:
    """Return the simple-average RSI over the last ``period`` changes.

    Requires ``period + 1`` points. Each change is the newer close minus the
    older one. Raises:
        ZeroLossError: when the window has no losing periods.
    """
    _check_period(period)
    if store.size() < period + 1:
        return INSUFFICIENT_DATA

    closes = store.closes(period + 1)
    # closes[i-1] is newer than closes[i]
    changes = closes[:-1] - closes[1:]
    avg_gain = float(np.sum(changes[changes > 0])) / period
    avg_loss = float(-np.sum(changes[changes < 0])) / period

    if avg_loss == 0:
        raise ZeroLossError(avg_gain, period)

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))

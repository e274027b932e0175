"""Indicator snapshot building for console rendering.

This module evaluates the fixed indicator set shown on every poll cycle
and packs the results into a plain dictionary.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from strategy.indicators import (
    ZeroLossError,
    bollinger_band,
    detect_trend,
    exponential_moving_average,
    relative_strength_index,
    simple_moving_average,
    standard_deviation,
    weighted_moving_average,
)
from strategy.series import SeriesStore

SMA_PERIOD = 5
EMA_PERIOD = 10
WMA_PERIOD = 20
VOLATILITY_PERIOD = 20
BOLLINGER_MULTIPLIER = 2.0
TREND_SHORT_PERIOD = 10
TREND_LONG_PERIOD = 30
RSI_PERIOD = 14

RSI_OK = "ok"
RSI_NO_LOSSES = "no_losses"
RSI_FLAT = "flat"
RSI_INSUFFICIENT = "insufficient"


def build_indicator_snapshot(symbol: str, store: SeriesStore) -> Dict[str, Any]:
    """Assemble the per-cycle indicator snapshot for ``symbol``.

    This helper operates purely on the series store without performing
    any I/O or logging. Indicators whose window exceeds the stored history
    keep their 0.0 value and are flagged in ``available``.

    Args:
        symbol: Ticker symbol being monitored.
        store: Series store holding the latest fetch.

    Returns:
        Dictionary containing the snapshot data.
    """
    size = store.size()
    latest = store.latest() if size else None

    rsi: Optional[float]
    if size < RSI_PERIOD + 1:
        rsi = relative_strength_index(store, RSI_PERIOD)
        rsi_status = RSI_INSUFFICIENT
    else:
        try:
            rsi = relative_strength_index(store, RSI_PERIOD)
            rsi_status = RSI_OK
        except ZeroLossError as exc:
            rsi = None
            rsi_status = RSI_NO_LOSSES if exc.avg_gain > 0 else RSI_FLAT

    snapshot: Dict[str, Any] = {
        "symbol": symbol,
        "points": size,
        "price": latest.close if latest else None,
        "timestamp": latest.timestamp if latest else None,
        "moving_averages": {
            "sma": {"period": SMA_PERIOD, "value": simple_moving_average(store, SMA_PERIOD)},
            "ema": {"period": EMA_PERIOD, "value": exponential_moving_average(store, EMA_PERIOD)},
            "wma": {"period": WMA_PERIOD, "value": weighted_moving_average(store, WMA_PERIOD)},
        },
        "volatility": {
            "period": VOLATILITY_PERIOD,
            "multiplier": BOLLINGER_MULTIPLIER,
            "std_dev": standard_deviation(store, VOLATILITY_PERIOD),
            "upper_band": bollinger_band(store, VOLATILITY_PERIOD, BOLLINGER_MULTIPLIER, True),
            "lower_band": bollinger_band(store, VOLATILITY_PERIOD, BOLLINGER_MULTIPLIER, False),
        },
        "trend": {
            "short_period": TREND_SHORT_PERIOD,
            "long_period": TREND_LONG_PERIOD,
            "value": detect_trend(store, TREND_SHORT_PERIOD, TREND_LONG_PERIOD),
        },
        "rsi": {
            "period": RSI_PERIOD,
            "value": rsi,
            "status": rsi_status,
        },
        "available": {
            "sma": size >= SMA_PERIOD,
            "ema": size >= EMA_PERIOD,
            "wma": size >= WMA_PERIOD,
            "volatility": size >= VOLATILITY_PERIOD,
            "trend": size >= TREND_LONG_PERIOD,
            "rsi": size >= RSI_PERIOD + 1,
        },
    }

    return snapshot

"""Strategy layer: price series storage and indicator computation."""
from strategy.series import OutOfRangeError, PricePoint, SeriesStore
from strategy.indicators import (
    INSUFFICIENT_DATA,
    IndicatorError,
    Trend,
    ZeroLossError,
    bollinger_band,
    detect_trend,
    exponential_moving_average,
    relative_strength_index,
    simple_moving_average,
    standard_deviation,
    weighted_moving_average,
    wma_weights,
)
from strategy.snapshot import build_indicator_snapshot

__all__ = [
    "OutOfRangeError",
    "PricePoint",
    "SeriesStore",
    "INSUFFICIENT_DATA",
    "IndicatorError",
    "Trend",
    "ZeroLossError",
    "bollinger_band",
    "detect_trend",
    "exponential_moving_average",
    "relative_strength_index",
    "simple_moving_average",
    "standard_deviation",
    "weighted_moving_average",
    "wma_weights",
    "build_indicator_snapshot",
]

"""Tests for strategy/indicators.py module."""
import pytest

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
from strategy.series import PricePoint, SeriesStore


def make_store(prices):
    """Store with ``prices`` given newest first."""
    store = SeriesStore()
    store.replace(
        PricePoint(timestamp=1_700_000_000_000 - i * 60_000, close=float(p))
        for i, p in enumerate(prices)
    )
    return store


WINDOW_FUNCTIONS = [
    simple_moving_average,
    exponential_moving_average,
    weighted_moving_average,
    standard_deviation,
]


class TestInsufficientData:
    """Functions return the 0.0 sentinel when the window is too short."""

    @pytest.mark.parametrize("func", WINDOW_FUNCTIONS)
    def test_short_series_returns_sentinel(self, func):
        store = make_store([5.0, 6.0, 7.0])
        assert func(store, 4) == 0.0
        assert func(store, 4) == INSUFFICIENT_DATA

    @pytest.mark.parametrize("func", WINDOW_FUNCTIONS)
    def test_empty_series_returns_sentinel(self, func):
        assert func(SeriesStore(), 1) == 0.0

    def test_bollinger_short_series_is_zero(self):
        store = make_store([1.0, 2.0])
        assert bollinger_band(store, 20, 2.0, True) == 0.0
        assert bollinger_band(store, 20, 2.0, False) == 0.0

    @pytest.mark.parametrize("func", WINDOW_FUNCTIONS + [relative_strength_index])
    def test_non_positive_period_rejected(self, func):
        with pytest.raises(ValueError):
            func(make_store([1.0, 2.0]), 0)


class TestMovingAverages:
    def test_sma_of_five_points(self):
        store = make_store([10, 20, 30, 40, 50])
        assert simple_moving_average(store, 5) == 30.0

    def test_sma_uses_most_recent_points_only(self):
        store = make_store([101.0, 100.0, 99.0, 98.0, 97.0, 96.0])
        assert simple_moving_average(store, 5) == 99.0

    def test_ema_walks_from_newest_to_oldest(self):
        # alpha = 0.5: seed 10, then 0.5*20 + 0.5*10 = 15, then 0.5*30 + 0.5*15
        store = make_store([10, 20, 30, 40])
        assert exponential_moving_average(store, 3) == pytest.approx(22.5)

    def test_ema_period_one_is_latest_price(self):
        store = make_store([42.0, 1.0])
        assert exponential_moving_average(store, 1) == 42.0

    def test_wma_weights_favour_latest(self):
        weights = wma_weights(5)
        assert weights[0] == 5
        assert weights[-1] == 1
        assert weights.sum() == 5 * 6 / 2

    def test_wma_value(self):
        store = make_store([10, 20, 30])
        # (10*3 + 20*2 + 30*1) / 6
        assert weighted_moving_average(store, 3) == pytest.approx(100 / 6)

    def test_wma_of_constant_series(self):
        store = make_store([7.5] * 20)
        assert weighted_moving_average(store, 20) == pytest.approx(7.5)


class TestVolatility:
    def test_population_standard_deviation(self):
        store = make_store([2, 4, 4, 4, 5, 5, 7, 9])
        assert standard_deviation(store, 8) == pytest.approx(2.0)

    @pytest.mark.parametrize("period", [1, 2, 5, 10])
    def test_constant_series_has_zero_deviation(self, period):
        store = make_store([12.25] * 10)
        assert standard_deviation(store, period) == 0.0

    @pytest.mark.parametrize("multiplier", [0.5, 1.0, 2.0, 3.0])
    def test_band_width_is_twice_multiplier_times_deviation(self, multiplier):
        store = make_store([101.2, 99.8, 100.5, 102.3, 98.7, 100.0, 103.1, 97.9])
        upper = bollinger_band(store, 8, multiplier, True)
        lower = bollinger_band(store, 8, multiplier, False)
        assert upper - lower == pytest.approx(2 * multiplier * standard_deviation(store, 8))

    def test_bands_centre_on_sma(self):
        store = make_store([2, 4, 4, 4, 5, 5, 7, 9])
        assert bollinger_band(store, 8, 2.0, True) == pytest.approx(9.0)
        assert bollinger_band(store, 8, 2.0, False) == pytest.approx(1.0)


class TestTrend:
    def test_uptrend(self):
        assert detect_trend(make_store([10, 10, 1, 1]), 2, 4) == Trend.UPTREND

    def test_downtrend(self):
        assert detect_trend(make_store([1, 1, 10, 10]), 2, 4) == Trend.DOWNTREND

    def test_sideways(self):
        assert detect_trend(make_store([3, 3, 3, 3]), 2, 4) == Trend.SIDEWAYS

    @pytest.mark.parametrize("short_period", [1, 2, 3, 10])
    def test_insufficient_data_regardless_of_short_period(self, short_period):
        store = make_store([1, 2, 3])
        assert detect_trend(store, short_period, 4) == Trend.INSUFFICIENT_DATA

    def test_trend_compares_equal_to_label(self):
        assert detect_trend(make_store([1, 2]), 1, 30) == "Insufficient data"
        assert detect_trend(make_store([10, 10, 1, 1]), 2, 4) == "Uptrend"


class TestRelativeStrengthIndex:
    def test_balanced_window_is_fifty(self):
        # changes: +1, -2, +1
        store = make_store([3, 2, 4, 3])
        assert relative_strength_index(store, 3) == pytest.approx(50.0)

    def test_only_losses_is_zero(self):
        store = make_store([1, 2, 3, 4])
        assert relative_strength_index(store, 3) == pytest.approx(0.0)

    def test_mixed_window(self):
        # changes: +2, -1, +1 -> gain 3/3, loss 1/3, rs 3
        store = make_store([10, 8, 9, 8])
        assert relative_strength_index(store, 3) == pytest.approx(75.0)

    def test_needs_period_plus_one_points(self):
        store = make_store(list(range(14, 0, -1)))
        assert store.size() == 14
        assert relative_strength_index(store, 14) == 0.0

    def test_rising_prices_raise_zero_loss(self):
        # Decreasing by position means strictly increasing over time.
        store = make_store([20, 19, 18, 17, 16, 15])
        with pytest.raises(ZeroLossError) as excinfo:
            relative_strength_index(store, 5)
        assert excinfo.value.avg_gain == pytest.approx(1.0)
        assert excinfo.value.period == 5

    def test_flat_window_raises_zero_loss_without_gain(self):
        store = make_store([5.0] * 6)
        with pytest.raises(ZeroLossError) as excinfo:
            relative_strength_index(store, 5)
        assert excinfo.value.avg_gain == 0.0

    def test_zero_loss_error_is_detectable_as_zero_division(self):
        assert issubclass(ZeroLossError, ZeroDivisionError)
        assert issubclass(ZeroLossError, IndicatorError)

    def test_only_window_changes_count(self):
        # Older loss beyond the window is ignored.
        store = make_store([4, 3, 2, 1, 50])
        with pytest.raises(ZeroLossError):
            relative_strength_index(store, 3)

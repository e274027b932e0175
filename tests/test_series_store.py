import unittest

import pandas as pd

from strategy.series import OutOfRangeError, PricePoint, SeriesStore


def _points(prices, start_ms=1_700_000_000_000, step_ms=60_000):
    """Build newest-first points with one-minute spacing."""
    return [
        PricePoint(timestamp=start_ms - i * step_ms, close=price)
        for i, price in enumerate(prices)
    ]


class SeriesStoreTests(unittest.TestCase):
    def test_new_store_is_empty(self) -> None:
        store = SeriesStore()
        self.assertEqual(store.size(), 0)
        self.assertEqual(len(store), 0)
        with self.assertRaises(OutOfRangeError):
            store.at(0)

    def test_replace_then_read_back_for_various_sizes(self) -> None:
        store = SeriesStore()
        for n in (0, 1, 2, 5, 40):
            points = _points([100.0 + i for i in range(n)])
            store.replace(points)
            self.assertEqual(store.size(), n)
            if n:
                self.assertEqual(store.at(0), points[0])
                self.assertEqual(store.at(n - 1), points[-1])

    def test_replace_shrinks_window(self) -> None:
        store = SeriesStore()
        store.replace(_points([1.0, 2.0, 3.0, 4.0]))
        store.replace(_points([9.0, 8.0]))
        self.assertEqual(store.size(), 2)
        self.assertEqual(store.at(0).close, 9.0)
        with self.assertRaises(OutOfRangeError):
            store.at(2)

    def test_at_rejects_negative_positions(self) -> None:
        store = SeriesStore()
        store.replace(_points([1.0, 2.0]))
        with self.assertRaises(OutOfRangeError):
            store.at(-1)

    def test_out_of_range_is_an_index_error(self) -> None:
        self.assertTrue(issubclass(OutOfRangeError, IndexError))

    def test_failed_replace_keeps_previous_contents(self) -> None:
        store = SeriesStore()
        store.replace(_points([5.0, 4.0, 3.0]))

        def broken():
            yield PricePoint(timestamp=1, close=1.0)
            raise RuntimeError("feed interrupted")

        with self.assertRaises(RuntimeError):
            store.replace(broken())
        self.assertEqual(store.size(), 3)
        self.assertEqual(store.latest().close, 5.0)

    def test_closes_returns_newest_first_window(self) -> None:
        store = SeriesStore()
        store.replace(_points([10.0, 20.0, 30.0, 40.0]))
        self.assertEqual(store.closes(3).tolist(), [10.0, 20.0, 30.0])

    def test_closes_is_a_copy(self) -> None:
        store = SeriesStore()
        store.replace(_points([10.0, 20.0]))
        window = store.closes(2)
        window[0] = -1.0
        self.assertEqual(store.at(0).close, 10.0)

    def test_to_frame_has_utc_timestamps(self) -> None:
        store = SeriesStore()
        store.replace([PricePoint(timestamp=0, close=1.5)])
        frame = store.to_frame()
        self.assertEqual(list(frame.columns), ["timestamp", "close"])
        self.assertEqual(frame["timestamp"].iloc[0], pd.Timestamp("1970-01-01", tz="UTC"))
        self.assertEqual(frame["close"].iloc[0], 1.5)


class PricePointTests(unittest.TestCase):
    def test_negative_close_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PricePoint(timestamp=0, close=-0.01)

    def test_non_finite_close_rejected(self) -> None:
        for value in (float("inf"), float("-inf"), float("nan")):
            with self.assertRaises(ValueError):
                PricePoint(timestamp=0, close=value)

    def test_zero_close_allowed(self) -> None:
        self.assertEqual(PricePoint(timestamp=0, close=0.0).close, 0.0)


if __name__ == "__main__":
    unittest.main()

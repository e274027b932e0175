"""Intraday response parsing.

This module turns an Alpha Vantage ``TIME_SERIES_INTRADAY`` body into the
newest-first sequence of ``PricePoint`` expected by the series store.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from feed.base import ParseError
from strategy.series import PricePoint

CLOSE_FIELD = "4. close"
META_DATA_KEY = "Meta Data"
TIME_ZONE_FIELD = "6. Time Zone"
DEFAULT_TIME_ZONE = "US/Eastern"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Keys the provider uses instead of data for bad symbols, throttling and plan limits.
PROVIDER_MESSAGE_KEYS = ("Error Message", "Note", "Information")

_EPOCH = pd.Timestamp("1970-01-01", tz="UTC")


def series_key(interval: str) -> str:
    return f"Time Series ({interval})"


def _load_payload(raw: str) -> Dict[str, Any]:
    try:
        payload = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ParseError(f"Response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ParseError(f"Expected a JSON object, got {type(payload).__name__}")
    for key in PROVIDER_MESSAGE_KEYS:
        if key in payload:
            raise ParseError(f"Quote provider returned '{key}': {payload[key]}")
    return payload


def _resolve_time_zone(payload: Dict[str, Any]) -> str:
    meta = payload.get(META_DATA_KEY)
    if isinstance(meta, dict):
        value = meta.get(TIME_ZONE_FIELD)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return DEFAULT_TIME_ZONE


def _to_epoch_millis(stamps: List[str], time_zone: str) -> pd.Series:
    local = pd.to_datetime(pd.Series(stamps), format=TIMESTAMP_FORMAT, errors="coerce")
    if local.isna().any():
        bad = [stamps[i] for i in local.index[local.isna().to_numpy()]]
        raise ParseError(f"Unparsable timestamps: {bad[:3]}")
    try:
        localized = local.dt.tz_localize(
            time_zone,
            ambiguous=np.zeros(len(local), dtype=bool),
            nonexistent="shift_forward",
        )
    except (KeyError, ValueError) as exc:
        raise ParseError(f"Unknown time zone '{time_zone}': {exc}") from exc
    return (localized - _EPOCH) // pd.Timedelta(milliseconds=1)


def parse_intraday_series(raw: str, interval: str = "1min") -> List[PricePoint]:
    """Parse a raw intraday body into newest-first price points.

    Args:
        raw: Response body from the quote provider.
        interval: Feed interval used in the request, selects the series key.

    Returns:
        List of PricePoint ordered newest first, regardless of key order in
        the body.

    Raises:
        ParseError: On invalid JSON, provider error payloads, a missing
            series key, or entries without a usable close price/timestamp.
    """
    payload = _load_payload(raw)

    key = series_key(interval)
    rows = payload.get(key)
    if not isinstance(rows, dict):
        raise ParseError(f"Response missing expected key '{key}'")
    if not rows:
        return []

    stamps: List[str] = []
    closes: List[Any] = []
    for stamp, fields in rows.items():
        if not isinstance(fields, dict) or CLOSE_FIELD not in fields:
            raise ParseError(f"Entry {stamp!r} has no '{CLOSE_FIELD}' field")
        stamps.append(stamp)
        closes.append(fields[CLOSE_FIELD])

    close_values = pd.to_numeric(pd.Series(closes, dtype=object), errors="coerce")
    if close_values.isna().any():
        bad = [stamps[i] for i in close_values.index[close_values.isna().to_numpy()]]
        raise ParseError(f"Non-numeric close price at {bad[:3]}")
    if not np.isfinite(close_values.to_numpy(dtype=float)).all():
        raise ParseError("Non-finite close price in response")
    if (close_values < 0).any():
        raise ParseError("Negative close price in response")

    frame = pd.DataFrame(
        {
            "timestamp": _to_epoch_millis(stamps, _resolve_time_zone(payload)),
            "close": close_values.astype(float),
        }
    ).sort_values("timestamp", ascending=False, kind="stable")

    points = [
        PricePoint(timestamp=int(row.timestamp), close=float(row.close))
        for row in frame.itertuples(index=False)
    ]
    logging.info("Parsed %d points from '%s'", len(points), key)
    return points

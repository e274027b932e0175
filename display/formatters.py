"""Console report formatting for indicator snapshots.

This module renders the per-cycle analysis block printed to the terminal.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from colorama import Fore, Style

from strategy.indicators import Trend
from strategy.snapshot import RSI_FLAT, RSI_INSUFFICIENT, RSI_NO_LOSSES
from utils.text import strip_ansi_codes

TREND_COLORS = {
    Trend.UPTREND: Fore.GREEN,
    Trend.DOWNTREND: Fore.RED,
    Trend.SIDEWAYS: Fore.YELLOW,
    Trend.INSUFFICIENT_DATA: Style.DIM,
}


def format_price(value: Optional[float], available: bool = True, needed: int = 0) -> str:
    """Render a price-like value, or an explicit marker when the window is too short."""
    if not available or value is None:
        return f"n/a (need {needed} points)" if needed else "n/a"
    return f"${value:.4f}"


def format_rsi(rsi: Dict[str, Any]) -> str:
    status = rsi["status"]
    if status == RSI_INSUFFICIENT:
        return f"n/a (need {rsi['period'] + 1} points)"
    if status == RSI_NO_LOSSES:
        return "100.00 (no losing periods)"
    if status == RSI_FLAT:
        return "undefined (flat window)"
    return f"{rsi['value']:.2f}"


def build_analysis_report(
    snapshot: Dict[str, Any],
    interval_seconds: Optional[int] = None,
    *,
    color: bool = True,
) -> str:
    """Render the analysis block for one poll cycle.

    Args:
        snapshot: Output of ``build_indicator_snapshot``.
        interval_seconds: Delay before the next cycle; omitted from the
            footer when None.
        color: Keep ANSI colour codes; plain text when False.

    Returns:
        Multi-line report string.
    """
    available = snapshot["available"]
    averages = snapshot["moving_averages"]
    volatility = snapshot["volatility"]
    trend = snapshot["trend"]
    period = volatility["period"]

    sma = averages["sma"]
    ema = averages["ema"]
    wma = averages["wma"]
    trend_value = Trend(trend["value"])

    lines: List[str] = [
        f"{Fore.CYAN}Analysis for {snapshot['symbol']}:{Style.RESET_ALL}",
        f"Latest price: {format_price(snapshot['price'])} ({snapshot['points']} points)",
        "Moving Averages:",
        f"  {sma['period']}-period SMA: "
        f"{format_price(sma['value'], available['sma'], sma['period'])}",
        f"  {ema['period']}-period EMA: "
        f"{format_price(ema['value'], available['ema'], ema['period'])}",
        f"  {wma['period']}-period WMA: "
        f"{format_price(wma['value'], available['wma'], wma['period'])}",
        "Volatility:",
        f"  {period}-period Standard Deviation: "
        f"{format_price(volatility['std_dev'], available['volatility'], period)}",
    ]
    if available["volatility"]:
        lines.append(
            f"  {period}-period Bollinger Bands: "
            f"{format_price(volatility['upper_band'])} (upper), "
            f"{format_price(volatility['lower_band'])} (lower)"
        )
    else:
        lines.append(f"  {period}-period Bollinger Bands: {format_price(None, False, period)}")

    lines.extend(
        [
            "Trend Detection:",
            f"  Short-term trend ({trend['short_period']} vs {trend['long_period']} periods): "
            f"{TREND_COLORS[trend_value]}{trend_value.value}{Style.RESET_ALL}",
            f"  {snapshot['rsi']['period']}-period RSI: {format_rsi(snapshot['rsi'])}",
        ]
    )

    if interval_seconds is not None:
        lines.append("")
        lines.append(f"Next update in {interval_seconds} seconds...")

    report = "\n".join(lines) + "\n"
    if not color:
        return strip_ansi_codes(report)
    return report

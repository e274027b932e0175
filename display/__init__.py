"""Display layer for console output formatting."""
from display.formatters import (
    build_analysis_report,
    format_price,
    format_rsi,
)

__all__ = [
    "build_analysis_report",
    "format_price",
    "format_rsi",
]

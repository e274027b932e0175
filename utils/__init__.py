"""Utility functions for the monitor."""
from utils.text import strip_ansi_codes, ANSI_ESCAPE_RE

__all__ = [
    "strip_ansi_codes",
    "ANSI_ESCAPE_RE",
]

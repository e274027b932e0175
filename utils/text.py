"""Text processing utilities."""
from __future__ import annotations

import re

# Compiled regex for ANSI escape sequences
ANSI_ESCAPE_RE = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI color codes for plain-text terminals and captured output.

    Args:
        text: Input string potentially containing ANSI escape sequences.

    Returns:
        String with all ANSI escape sequences removed.
    """
    return ANSI_ESCAPE_RE.sub("", text)

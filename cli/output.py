"""
Output utilities for CLI.

Prints analysis reports to stdout and errors to stderr.
"""
from __future__ import annotations

import sys


def print_report(report: str) -> None:
    """Print a rendered analysis report to the terminal.

    Args:
        report: Text produced by ``build_analysis_report``.
    """
    print(report)


def print_error(message: str) -> None:
    """Print an error message to stderr without exiting.

    Args:
        message: Error message to display.
    """
    print(f"Error: {message}", file=sys.stderr)

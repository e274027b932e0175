"""
CLI entry point for ts-monitor.

Usage:
    python -m cli.main [--symbol IBM] [--interval 60]

Or if installed as console script:
    ts-monitor [--symbol IBM] [--interval 60]

Symbol and interval are prompted for interactively when not given.
The API key is read from ALPHAVANTAGE_API_KEY (environment or .env).
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

import click
from colorama import init as colorama_init

from cli.output import print_error
from feed.client import AlphaVantageClient
from monitor import SeriesMonitor
from monitor_config import MonitorConfig, emit_early_env_warnings, load_monitor_config_from_env


def configure_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    logging.getLogger().setLevel(logging.DEBUG if verbose else level)


def build_monitor(
    config: MonitorConfig,
    symbol: str,
    interval: int,
    *,
    color: bool = True,
) -> SeriesMonitor:
    """Wire the quote client and run loop from configuration."""
    client = AlphaVantageClient(
        config.api_key,
        base_url=config.base_url,
        interval=config.feed_interval,
        outputsize=config.outputsize,
        timeout=config.http_timeout,
    )
    return SeriesMonitor(
        symbol,
        client,
        interval,
        feed_interval=config.feed_interval,
        color=color,
    )


@click.command()
@click.option("--symbol", prompt="Enter stock symbol", help="Ticker symbol to monitor.")
@click.option(
    "--interval",
    type=click.IntRange(min=1),
    prompt="Enter update interval (in seconds)",
    help="Seconds to wait between updates.",
)
@click.option(
    "--cycles",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many updates (default: run until interrupted).",
)
@click.option("--no-color", is_flag=True, help="Disable coloured output.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(
    symbol: str,
    interval: int,
    cycles: Optional[int],
    no_color: bool,
    verbose: bool,
) -> None:
    """Time series monitor - polls one symbol and prints technical indicators."""
    config = load_monitor_config_from_env()
    configure_logging(config.log_level, verbose)
    emit_early_env_warnings()

    if config.using_demo_key:
        logging.warning(
            "ALPHAVANTAGE_API_KEY not set; using the 'demo' key, which only serves IBM."
        )

    color = not (no_color or config.no_color)
    if color:
        colorama_init()

    try:
        monitor = build_monitor(config, symbol, interval, color=color)
    except ValueError as exc:
        print_error(str(exc))
        sys.exit(1)

    monitor.run_forever(max_cycles=cycles)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()

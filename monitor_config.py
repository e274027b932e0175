from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv


EARLY_ENV_WARNINGS: List[str] = []

DEFAULT_API_KEY = "demo"
DEFAULT_BASE_URL = "https://www.alphavantage.co/query"
DEFAULT_FEED_INTERVAL = "1min"
DEFAULT_OUTPUTSIZE = "compact"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "WARNING"

SUPPORTED_FEED_INTERVALS = ("1min", "5min", "15min", "30min", "60min")
SUPPORTED_OUTPUTSIZES = ("compact", "full")


def _parse_bool_env(value: Optional[str], *, default: bool = False) -> bool:
    """Convert environment string to bool with sensible defaults."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_float_env(value: Optional[str], *, default: float) -> float:
    """Convert environment string to a positive float with fallback and logging."""
    if value is None or value == "":
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        EARLY_ENV_WARNINGS.append(
            f"Invalid float environment value '{value}'; using default {default:.2f}"
        )
        return default
    if parsed <= 0:
        EARLY_ENV_WARNINGS.append(
            f"Non-positive environment value '{value}'; using default {default:.2f}"
        )
        return default
    return parsed


def _parse_choice_env(
    name: str,
    value: Optional[str],
    *,
    choices: Iterable[str],
    default: str,
) -> str:
    """Normalize an environment string and check it against ``choices``."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if not normalized:
        return default
    allowed = tuple(choices)
    if normalized not in allowed:
        EARLY_ENV_WARNINGS.append(
            f"Unsupported {name} '{value}'; using '{default}'."
        )
        return default
    return normalized


def _parse_str_env(value: Optional[str], *, default: str) -> str:
    if value is None:
        return default
    return value.strip() or default


def emit_early_env_warnings() -> None:
    """Log and clear any configuration warnings collected while loading."""
    global EARLY_ENV_WARNINGS
    for msg in EARLY_ENV_WARNINGS:
        logging.warning(msg)
    EARLY_ENV_WARNINGS = []


@dataclass
class MonitorConfig:
    api_key: str
    base_url: str
    feed_interval: str
    outputsize: str
    http_timeout: float
    log_level: str
    no_color: bool

    @property
    def using_demo_key(self) -> bool:
        return self.api_key == DEFAULT_API_KEY


def load_monitor_config_from_env(dotenv_path: Optional[Path] = None) -> MonitorConfig:
    """Build the monitor configuration from ``.env`` and the process environment.

    Values already present in the environment win over the ``.env`` file.
    """
    load_dotenv(dotenv_path=dotenv_path, override=False)

    api_key = _parse_str_env(os.getenv("ALPHAVANTAGE_API_KEY"), default=DEFAULT_API_KEY)
    base_url = _parse_str_env(os.getenv("ALPHAVANTAGE_BASE_URL"), default=DEFAULT_BASE_URL)
    feed_interval = _parse_choice_env(
        "TS_MONITOR_FEED_INTERVAL",
        os.getenv("TS_MONITOR_FEED_INTERVAL"),
        choices=SUPPORTED_FEED_INTERVALS,
        default=DEFAULT_FEED_INTERVAL,
    )
    outputsize = _parse_choice_env(
        "TS_MONITOR_OUTPUTSIZE",
        os.getenv("TS_MONITOR_OUTPUTSIZE"),
        choices=SUPPORTED_OUTPUTSIZES,
        default=DEFAULT_OUTPUTSIZE,
    )
    http_timeout = _parse_float_env(
        os.getenv("TS_MONITOR_HTTP_TIMEOUT"),
        default=DEFAULT_HTTP_TIMEOUT,
    )

    raw_level = os.getenv("TS_MONITOR_LOG_LEVEL")
    log_level = (raw_level or DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(log_level), int):
        EARLY_ENV_WARNINGS.append(
            f"Unsupported TS_MONITOR_LOG_LEVEL '{raw_level}'; using '{DEFAULT_LOG_LEVEL}'."
        )
        log_level = DEFAULT_LOG_LEVEL

    no_color = _parse_bool_env(os.getenv("TS_MONITOR_NO_COLOR"), default=False)

    return MonitorConfig(
        api_key=api_key,
        base_url=base_url,
        feed_interval=feed_interval,
        outputsize=outputsize,
        http_timeout=http_timeout,
        log_level=log_level,
        no_color=no_color,
    )

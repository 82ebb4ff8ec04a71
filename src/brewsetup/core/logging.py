"""Structured logging for the catalog engine and its front ends."""

from __future__ import annotations

import logging
import sys
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.types import FilteringBoundLogger, Processor

from brewsetup.core.config import LOG_DIR, discover_log_level

_CONFIGURED = False
_CONSOLE_ENABLED = False


def sanitise_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Drop None values and flatten enums and errors to plain strings.

    Args:
        logger: The logger instance.
        method_name: The name of the method called on the logger.
        event_dict: The event dictionary to sanitize.

    Returns:
        The sanitized event dictionary.
    """
    sanitised = {}
    for key, value in event_dict.items():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        sanitised[key] = value

    if "error" in sanitised and not isinstance(sanitised["error"], str):
        sanitised["error"] = str(sanitised["error"])

    return sanitised


def _renderers(enable_console: bool) -> list[Processor]:
    if enable_console:
        return [structlog.processors.ExceptionRenderer(), structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(
    level: str | None = None, log_file: Path | None = None, enable_console: bool = False
) -> None:
    """Configure structlog once per process.

    Events always go to a rotating JSON log file. With ``enable_console``
    warnings and errors are also rendered to stderr for the CLI. A later call
    asking for the console adds it to an existing configuration.

    Args:
        level: Logging level name; BREWSETUP_LOG_LEVEL or INFO when omitted.
        log_file: Log file path; ``~/.brewsetup/logs/catalog.log`` when omitted.
        enable_console: Whether to also log warnings to stderr.
    """
    global _CONFIGURED, _CONSOLE_ENABLED
    if _CONFIGURED and (_CONSOLE_ENABLED or not enable_console):
        return

    numeric_level = getattr(logging, (level or discover_log_level()).upper(), logging.INFO)

    if not _CONFIGURED:
        if log_file is None:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
            log_file = LOG_DIR / "catalog.log"

        file_handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=2)
        file_handler.setLevel(numeric_level)
        logging.root.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.root.addHandler(console_handler)
        _CONSOLE_ENABLED = True

    processors: list[Processor] = [
        sanitise_context,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=processors + _renderers(enable_console),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.root.setLevel(numeric_level)

    _CONFIGURED = True


def get_logger(name: str = "brewsetup") -> FilteringBoundLogger:
    """Get a structlog logger, configuring logging with defaults if needed.

    Usage:
        log = get_logger(__name__)
        log.info("registry_fetch_complete", source="formula", count=123)

    Standard context keys:
        - source (str): "formula" or "cask"
        - count (int): Number of records or entries involved
        - duration_ms (int): Operation duration in milliseconds
        - error (str): Error message if applicable
    """
    if not _CONFIGURED:
        configure_logging()
    return structlog.get_logger(name)

"""Logging configuration for linehint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# pygls is chatty at INFO; only let its warnings through unless debugging
_LIBRARY_LOGGERS = ("pygls",)


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure logging for linehint and the LSP library underneath it.

    Never logs to stdout, which carries the stdio transport.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs to stderr.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    library_level = log_level if log_level <= logging.DEBUG else logging.WARNING
    levels = {"linehint": log_level}
    levels.update((name, library_level) for name in _LIBRARY_LOGGERS)

    for name, logger_level in levels.items():
        logger = logging.getLogger(name)
        logger.setLevel(logger_level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name under the linehint namespace.

    Args:
        name: Logger name (will be prefixed with 'linehint.').

    Returns:
        Logger instance.
    """
    return logging.getLogger(f"linehint.{name}")

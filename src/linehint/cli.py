"""Command-line interface for linehint."""

from __future__ import annotations

import argparse
import dataclasses
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from linehint.config import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_MAX_PER_LINE,
    DisplayConfig,
    parse_max_per_line,
)
from linehint.logging import configure_logging, get_logger
from linehint.lsp.server import create_server


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool
    display: DisplayConfig


def _max_per_line(value: str) -> int | None:
    try:
        return parse_max_per_line(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected a positive integer or 'all', got {value!r}"
        ) from exc


def _delay(value: str) -> float:
    try:
        delay = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid delay: {value!r}") from exc
    if delay < 0:
        raise argparse.ArgumentTypeError("delay must be non-negative")
    return delay


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="linehint",
        description="Show the diagnostics of the line under the cursor",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for TCP transport (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=4390,
        help="Port for TCP transport (default: 4390)",
    )

    parser.add_argument(
        "--delay",
        type=_delay,
        default=DEFAULT_DELAY_SECONDS,
        help=f"Idle seconds before diagnostics are shown (default: {DEFAULT_DELAY_SECONDS})",
    )

    parser.add_argument(
        "--max-per-line",
        type=_max_per_line,
        default=DEFAULT_MAX_PER_LINE,
        help=f"Diagnostics shown per line, or 'all' (default: {DEFAULT_MAX_PER_LINE})",
    )

    parser.add_argument(
        "--no-auto-enable",
        dest="auto_enable",
        action="store_false",
        help="Wait for linehint/setActive instead of activating on open",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    args = parser.parse_args(argv)

    # Explicit --log-level wins, otherwise --debug sets DEBUG
    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    return CliArgs(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
        display=DisplayConfig(
            delay_seconds=args.delay,
            max_per_line=args.max_per_line,
            auto_enable=args.auto_enable,
        ),
    )


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the LSP server.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")

    logger.info("Starting linehint server")
    logger.debug("Configuration: %s", args)

    try:
        server = create_server(config=args.display)

        if args.transport == "stdio":
            logger.info("Starting in stdio mode")
            server.start_io()
        else:
            logger.info("Starting in TCP mode on %s:%d", args.host, args.port)
            server.start_tcp(args.host, args.port)

        return 0

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error in server", exc_info=True)
        return 1

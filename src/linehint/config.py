"""User-facing configuration for diagnostic display."""

from __future__ import annotations

import dataclasses

__all__ = [
    "DEFAULT_DELAY_SECONDS",
    "DEFAULT_MAX_PER_LINE",
    "DisplayConfig",
    "parse_max_per_line",
]

DEFAULT_DELAY_SECONDS = 0.9
DEFAULT_MAX_PER_LINE = 1

_UNBOUNDED_WORDS = frozenset({"all", "unbounded"})


@dataclasses.dataclass(frozen=True)
class DisplayConfig:
    """
    Read-only display settings shared by the extractor and scheduler.

    Attributes:
        delay_seconds: Idle time before a line's diagnostics are shown.
        max_per_line: Maximum diagnostics shown per line, None for all.
        auto_enable: Activate the display when a document is opened.
    """

    delay_seconds: float = DEFAULT_DELAY_SECONDS
    max_per_line: int | None = DEFAULT_MAX_PER_LINE
    auto_enable: bool = True

    def __post_init__(self) -> None:
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative")
        if self.max_per_line is not None and self.max_per_line < 1:
            raise ValueError("max_per_line must be a positive integer or None")


def parse_max_per_line(value: str) -> int | None:
    """
    Parse a command-line value for the per-line limit.

    Args:
        value: A positive integer, or "all"/"unbounded" for no limit.

    Returns:
        The limit, or None when unbounded.

    Raises:
        ValueError: If the value is neither a keyword nor a positive integer.
    """
    if value.strip().lower() in _UNBOUNDED_WORDS:
        return None
    limit = int(value)
    if limit < 1:
        raise ValueError(f"max per line must be positive, got {limit}")
    return limit

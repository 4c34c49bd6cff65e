"""Per-line diagnostic extraction with truncation."""

from __future__ import annotations

import logging

from linehint.display.types import DiagnosticsEngine, LineDiagnostics
from linehint.logging import get_logger

__all__ = ["DiagnosticLineExtractor"]


class DiagnosticLineExtractor:
    """Fetches the diagnostics on a line and keeps a stable prefix."""

    def __init__(
        self,
        engine: DiagnosticsEngine,
        *,
        max_per_line: int | None = 1,
        logger: logging.Logger | None = None,
    ) -> None:
        self._engine = engine
        self._max_per_line = max_per_line
        self._logger = logger if logger is not None else get_logger("display")

    def extract(self, line: int) -> LineDiagnostics:
        """
        Return the diagnostics reported for a line, in engine order.

        Engine failures are logged and reported as an empty result.

        Args:
            line: 1-based line number.

        Returns:
            At most max_per_line diagnostics, or all of them when unbounded.
        """
        try:
            diagnostics = tuple(self._engine.query_diagnostics(line))
        except Exception:
            self._logger.exception("Diagnostics query failed for line %d", line)
            return ()

        if self._max_per_line is not None:
            diagnostics = diagnostics[: self._max_per_line]
        return diagnostics

"""Presentation of diagnostics in the host status area."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from linehint.display.formatter import format_diagnostics
from linehint.display.types import (
    Diagnostic,
    LineDiagnostics,
    PresentOutcome,
    StatusArea,
)
from linehint.logging import get_logger

__all__ = ["Presenter"]


class Presenter:
    """Writes formatted diagnostics unless a blocking interaction is active."""

    def __init__(
        self,
        status_area: StatusArea,
        *,
        formatter: Callable[[Iterable[Diagnostic]], str] = format_diagnostics,
        logger: logging.Logger | None = None,
    ) -> None:
        self._status_area = status_area
        self._formatter = formatter
        self._logger = logger if logger is not None else get_logger("display")

    def present(self, diagnostics: LineDiagnostics) -> PresentOutcome:
        """
        Show diagnostics in the status area, replacing the previous message.

        Args:
            diagnostics: Non-empty diagnostics for one line.

        Returns:
            SHOWN if written, DEFERRED if the host is blocked.

        Raises:
            ValueError: If diagnostics is empty.
        """
        if not diagnostics:
            raise ValueError("diagnostics must not be empty")

        if self._status_area.is_blocking():
            self._logger.debug(
                "Deferring diagnostics for line %d: blocking interaction",
                diagnostics[0].line,
            )
            return PresentOutcome.DEFERRED

        self._status_area.write(self._formatter(diagnostics))
        return PresentOutcome.SHOWN

"""Debounce scheduler for cursor-driven diagnostic display.

Owns the single outstanding timer of a session and the last captured
diagnostic snapshot. Runs entirely inside host loop callbacks.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from linehint.display.extractor import DiagnosticLineExtractor
from linehint.display.presenter import Presenter
from linehint.display.types import (
    CursorLineProvider,
    LineDiagnostics,
    PresentOutcome,
    Timer,
)
from linehint.logging import get_logger

__all__ = ["DebounceScheduler", "SessionState"]


@dataclasses.dataclass
class SessionState:
    """Mutable display state of one session."""

    pending: LineDiagnostics = ()
    timer_handle: Any | None = None

    def clear(self) -> None:
        self.pending = ()
        self.timer_handle = None


class DebounceScheduler:
    """Decides whether and when a line's diagnostics are presented.

    Idle: no snapshot and no timer. Pending: a timer is armed for the
    captured snapshot. Every cursor move restarts the full delay.
    """

    def __init__(
        self,
        *,
        extractor: DiagnosticLineExtractor,
        presenter: Presenter,
        timer: Timer,
        cursor_line: CursorLineProvider,
        delay_seconds: float,
        state: SessionState | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._extractor = extractor
        self._presenter = presenter
        self._timer = timer
        self._cursor_line = cursor_line
        self._delay_seconds = delay_seconds
        self._state = state if state is not None else SessionState()
        self._logger = logger if logger is not None else get_logger("display")

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_pending(self) -> bool:
        """True while a timer is armed."""
        return self._state.timer_handle is not None

    def on_cursor_moved(self, line: int) -> None:
        """
        Capture the diagnostics at the cursor and restart the delay.

        Args:
            line: 1-based cursor line after the last command.
        """
        self._cancel_timer()
        self._state.pending = self._extractor.extract(line)
        if self._state.pending:
            self._arm()

    def on_navigation_command(self, line: int) -> None:
        """
        Present the diagnostics at a navigation target without waiting.

        Args:
            line: 1-based line the navigation moved the cursor to.
        """
        self._cancel_timer()
        snapshot = self._extractor.extract(line)
        self._state.pending = ()
        if not snapshot:
            return

        self._logger.debug("Presenting line %d immediately", line)
        if self._presenter.present(snapshot) is PresentOutcome.DEFERRED:
            # Retry through the regular fire path once the host unblocks
            self._state.pending = snapshot
            self._arm()

    def reset(self) -> None:
        """Cancel any armed timer and forget the snapshot."""
        self._cancel_timer()
        self._state.clear()

    def _arm(self) -> None:
        self._state.timer_handle = self._timer.schedule(
            self._delay_seconds, self._fire
        )
        self._logger.debug(
            "Armed display timer for line %d (%.3fs)",
            self._state.pending[0].line,
            self._delay_seconds,
        )

    def _cancel_timer(self) -> None:
        handle = self._state.timer_handle
        if handle is not None:
            self._state.timer_handle = None
            self._timer.cancel(handle)

    def _fire(self) -> None:
        self._state.timer_handle = None
        snapshot = self._state.pending
        if not snapshot:
            return

        if self._presenter.present(snapshot) is PresentOutcome.DEFERRED:
            # The cursor may have moved without a command event reaching us
            self._state.pending = self._extractor.extract(self._cursor_line())
            if self._state.pending:
                self._arm()
            return

        self._state.pending = ()

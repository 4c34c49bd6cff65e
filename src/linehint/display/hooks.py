"""Hook adapter binding the scheduler to host events and navigation."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from linehint.display.scheduler import DebounceScheduler
from linehint.display.types import (
    CommandEvents,
    CursorLineProvider,
    NavigationOperation,
)
from linehint.logging import get_logger

P = ParamSpec("P")
R = TypeVar("R")

__all__ = ["CommandEventStream", "HookAdapter", "with_after_effect"]


def with_after_effect(
    operation: Callable[P, R],
    after: Callable[[], None],
    *,
    logger: logging.Logger | None = None,
) -> Callable[P, R]:
    """
    Wrap an operation so that an after-effect runs once it completes.

    The after-effect runs whether the operation returns or raises; the
    operation's return value and exception are passed through unchanged.
    Exceptions raised by the after-effect are logged, never propagated.

    Args:
        operation: The operation to wrap.
        after: Callable invoked after the operation.
        logger: Logger for after-effect failures. Defaults to linehint.display.

    Returns:
        The wrapped operation.
    """
    if logger is None:
        logger = get_logger("display")

    def run_after() -> None:
        try:
            after()
        except Exception:
            logger.exception(
                "Error in after-effect of %s",
                getattr(operation, "__name__", operation),
            )

    @functools.wraps(operation)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return operation(*args, **kwargs)
        finally:
            run_after()

    return wrapper


class CommandEventStream:
    """Listeners called with the cursor line after every user command."""

    def __init__(self) -> None:
        self._listeners: list[Callable[[int], None]] = []

    def add_listener(self, listener: Callable[[int], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[int], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, line: int) -> None:
        for listener in list(self._listeners):
            listener(line)

    def __len__(self) -> int:
        return len(self._listeners)


class HookAdapter:
    """Activates and deactivates cursor-driven display for one session."""

    def __init__(
        self,
        *,
        scheduler: DebounceScheduler,
        events: CommandEvents,
        cursor_line: CursorLineProvider,
        navigate_next: NavigationOperation,
        navigate_previous: NavigationOperation,
        logger: logging.Logger | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._events = events
        self._cursor_line = cursor_line
        self._raw_next = navigate_next
        self._raw_previous = navigate_previous
        self._next = navigate_next
        self._previous = navigate_previous
        self._active = False
        self._logger = logger if logger is not None else get_logger("display")

    @property
    def active(self) -> bool:
        return self._active

    def activate(self) -> None:
        """Subscribe to command events and wrap navigation. Idempotent."""
        if self._active:
            return
        self._events.add_listener(self._scheduler.on_cursor_moved)
        self._next = with_after_effect(
            self._raw_next, self._after_navigation, logger=self._logger
        )
        self._previous = with_after_effect(
            self._raw_previous, self._after_navigation, logger=self._logger
        )
        self._active = True
        self._logger.debug("Diagnostic display activated")

    def deactivate(self) -> None:
        """Unsubscribe, restore navigation and clear session state. Idempotent."""
        if not self._active:
            return
        self._events.remove_listener(self._scheduler.on_cursor_moved)
        self._next = self._raw_next
        self._previous = self._raw_previous
        self._scheduler.reset()
        self._active = False
        self._logger.debug("Diagnostic display deactivated")

    def navigate_next(self) -> Any:
        """Jump to the next diagnostic."""
        return self._next()

    def navigate_previous(self) -> Any:
        """Jump to the previous diagnostic."""
        return self._previous()

    def show_now(self) -> None:
        """Present the diagnostics at the cursor immediately."""
        self._scheduler.on_navigation_command(self._cursor_line())

    def _after_navigation(self) -> None:
        self._scheduler.on_navigation_command(self._cursor_line())

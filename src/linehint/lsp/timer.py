"""Timer primitive backed by the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from linehint.logging import get_logger
from linehint.lsp.error_handling import guard_callback

__all__ = ["AsyncioTimer"]


class AsyncioTimer:
    """Schedules one-shot callbacks with ``loop.call_later``.

    Callbacks run as ordinary loop callbacks, in arrival order, on the
    thread that owns the loop.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._logger = logger if logger is not None else get_logger("lsp.timer")

    def schedule(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        """
        Run callback once after delay seconds.

        Args:
            delay: Delay in seconds.
            callback: Callable invoked on the loop.

        Returns:
            Handle accepted by cancel().
        """
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        guarded = guard_callback(
            callback, logger=self._logger, callback_name="display timer"
        )
        return loop.call_later(delay, guarded)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        """Cancel a handle. Cancelling a fired or cancelled handle is a no-op."""
        handle.cancel()

"""Error handling utilities for LSP handlers and loop callbacks."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

__all__ = ["guard_callback", "wrap_handler"]


def wrap_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], R],
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that keeps a failing handler from reaching the client.

    The exception is logged with its traceback and the handler answers
    with a default value instead, so a malformed message never stops
    the server.

    Args:
        logger: Logger instance for error logging.
        feature_name: Method name of the handler (for error messages).
        default_factory: Callable that returns a default value on error.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("Error in %s handler", feature_name)
                return default_factory()

        return wrapper

    return decorator


def guard_callback(
    callback: Callable[[], None],
    *,
    logger: logging.Logger,
    callback_name: str,
) -> Callable[[], None]:
    """
    Wrap a loop callback so that its exceptions are logged, not raised.

    Args:
        callback: Zero-argument callback scheduled on the event loop.
        logger: Logger instance for error logging.
        callback_name: Human-readable name used in the log message.

    Returns:
        The guarded callback.
    """

    @functools.wraps(callback)
    def guarded() -> None:
        try:
            callback()
        except Exception:
            logger.exception("Error in %s callback", callback_name)

    return guarded

"""Type definitions for the diagnostic display core."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any, NamedTuple, Protocol, TypeAlias


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class Diagnostic(NamedTuple):
    """A single reported issue attached to a 1-based source line."""

    text: str
    line: int
    locatable: bool = True  # False when the engine could not anchor it


LineDiagnostics: TypeAlias = tuple[Diagnostic, ...]
CursorLineProvider: TypeAlias = Callable[[], int]
NavigationOperation: TypeAlias = Callable[[], Any]


class PresentOutcome(_StrEnum):
    """Result of a presentation attempt."""

    SHOWN = "shown"
    DEFERRED = "deferred"


class DiagnosticsEngine(Protocol):
    """Source of diagnostics for the lines of one document."""

    def query_diagnostics(self, line: int) -> Sequence[Diagnostic]: ...


class Timer(Protocol):
    """One-shot timer primitive provided by the host loop."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class StatusArea(Protocol):
    """Transient one-line message display of the host editor."""

    def write(self, text: str) -> None: ...

    def is_blocking(self) -> bool: ...


class CommandEvents(Protocol):
    """Per-command event stream delivering the cursor line after each command."""

    def add_listener(self, listener: Callable[[int], None]) -> None: ...

    def remove_listener(self, listener: Callable[[int], None]) -> None: ...

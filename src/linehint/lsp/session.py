"""Per-document display sessions hosted by the language server."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable

from lsprotocol import types

from linehint.config import DisplayConfig
from linehint.display import (
    CommandEventStream,
    DebounceScheduler,
    DiagnosticLineExtractor,
    HookAdapter,
    Presenter,
)
from linehint.display.types import Timer
from linehint.lsp.adapter import line_to_position
from linehint.lsp.store import DiagnosticStore, DocumentDiagnostics

__all__ = [
    "BlockingState",
    "CursorState",
    "DocumentSession",
    "LspStatusArea",
    "create_session",
]

ShowDocument = Callable[[str, int], None]


@dataclasses.dataclass
class BlockingState:
    """Whether the client reports a modal interaction in progress."""

    blocking: bool = False


@dataclasses.dataclass
class CursorState:
    """Last known 1-based cursor line of a document."""

    line: int = 1


class LspStatusArea:
    """Status area backed by ``window/showMessage``."""

    def __init__(
        self,
        show_message: Callable[[types.ShowMessageParams], object],
        blocking: BlockingState,
    ) -> None:
        self._show_message = show_message
        self._blocking = blocking

    def write(self, text: str) -> None:
        self._show_message(
            types.ShowMessageParams(type=types.MessageType.Info, message=text)
        )

    def is_blocking(self) -> bool:
        return self._blocking.blocking


@dataclasses.dataclass
class DocumentSession:
    """Display state, hooks and cursor of one open document."""

    uri: str
    cursor: CursorState
    events: CommandEventStream
    scheduler: DebounceScheduler
    hooks: HookAdapter

    def move_cursor(self, line: int) -> None:
        """Record a cursor report and notify command listeners."""
        self.cursor.line = line
        self.events.emit(line)

    def close(self) -> None:
        self.hooks.deactivate()


def _navigation(
    engine: DocumentDiagnostics,
    cursor: CursorState,
    find_line: Callable[[int], int | None],
    show_document: ShowDocument,
) -> Callable[[], types.Position | None]:
    def navigate() -> types.Position | None:
        target = find_line(cursor.line)
        if target is None:
            return None
        cursor.line = target
        show_document(engine.uri, target)
        return line_to_position(target)

    return navigate


def create_session(
    uri: str,
    *,
    store: DiagnosticStore,
    config: DisplayConfig,
    timer: Timer,
    status_area: LspStatusArea,
    show_document: ShowDocument,
) -> DocumentSession:
    """
    Wire the display components for one document.

    Args:
        uri: Document URI.
        store: Diagnostics engine shared by all documents.
        config: Display configuration.
        timer: Host timer primitive.
        status_area: Host status area.
        show_document: Callable moving the client cursor to a 1-based line.

    Returns:
        An inactive session.
    """
    engine = store.for_document(uri)
    cursor = CursorState()
    events = CommandEventStream()

    def cursor_line() -> int:
        return cursor.line

    scheduler = DebounceScheduler(
        extractor=DiagnosticLineExtractor(engine, max_per_line=config.max_per_line),
        presenter=Presenter(status_area),
        timer=timer,
        cursor_line=cursor_line,
        delay_seconds=config.delay_seconds,
    )
    hooks = HookAdapter(
        scheduler=scheduler,
        events=events,
        cursor_line=cursor_line,
        navigate_next=_navigation(engine, cursor, engine.next_line, show_document),
        navigate_previous=_navigation(
            engine, cursor, engine.previous_line, show_document
        ),
    )
    return DocumentSession(
        uri=uri,
        cursor=cursor,
        events=events,
        scheduler=scheduler,
        hooks=hooks,
    )

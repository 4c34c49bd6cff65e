"""linehint LSP companion server using pygls 2.0.

Shows the diagnostics of the line under the cursor in the client's
message area once the cursor has rested there for a while.
"""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from linehint.config import DisplayConfig
from linehint.display.types import Timer
from linehint.logging import get_logger
from linehint.lsp.adapter import (
    from_lsp_diagnostic,
    get_field,
    line_to_position,
    position_to_line,
    structure_params,
)
from linehint.lsp.error_handling import wrap_handler
from linehint.lsp.session import (
    BlockingState,
    DocumentSession,
    LspStatusArea,
    create_session,
)
from linehint.lsp.store import DiagnosticStore
from linehint.lsp.timer import AsyncioTimer

__all__ = [
    "DID_CHANGE_BLOCKING_STATE",
    "DID_MOVE_CURSOR",
    "NEXT_DIAGNOSTIC",
    "PREVIOUS_DIAGNOSTIC",
    "PUBLISH_DIAGNOSTICS",
    "SET_ACTIVE",
    "SHOW_DIAGNOSTICS",
    "create_server",
]

PUBLISH_DIAGNOSTICS = "linehint/publishDiagnostics"
DID_MOVE_CURSOR = "linehint/didMoveCursor"
DID_CHANGE_BLOCKING_STATE = "linehint/didChangeBlockingState"
SET_ACTIVE = "linehint/setActive"
NEXT_DIAGNOSTIC = "linehint/nextDiagnostic"
PREVIOUS_DIAGNOSTIC = "linehint/previousDiagnostic"
SHOW_DIAGNOSTICS = "linehint/showDiagnostics"


def create_server(
    *,
    config: DisplayConfig | None = None,
    timer: Timer | None = None,
    logger: logging.Logger | None = None,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        config: Display configuration. If None, uses defaults.
        timer: Timer primitive. If None, uses the asyncio loop.
        logger: Optional logger instance. If None, uses the linehint.lsp logger.

    Returns:
        Configured LanguageServer instance.
    """
    if config is None:
        config = DisplayConfig()
    if timer is None:
        timer = AsyncioTimer()
    if logger is None:
        logger = get_logger("lsp")

    server = LanguageServer("linehint", "v0.1.0")
    store = DiagnosticStore()
    blocking = BlockingState()
    sessions: dict[str, DocumentSession] = {}

    def _show_message(params: types.ShowMessageParams) -> object:
        return server.window_show_message(params)

    def _show_document(uri: str, line: int) -> None:
        position = line_to_position(line)
        server.window_show_document(
            types.ShowDocumentParams(
                uri=uri,
                take_focus=True,
                selection=types.Range(start=position, end=position),
            )
        )

    status_area = LspStatusArea(_show_message, blocking)

    def _open_session(uri: str) -> DocumentSession:
        session = sessions.get(uri)
        if session is None:
            session = create_session(
                uri,
                store=store,
                config=config,
                timer=timer,
                status_area=status_area,
                show_document=_show_document,
            )
            sessions[uri] = session
        return session

    def _positioned_session(params: object) -> DocumentSession | None:
        """Look up the session named by params and record its cursor."""
        position_params = structure_params(params, types.TextDocumentPositionParams)
        session = sessions.get(position_params.text_document.uri)
        if session is None:
            logger.debug("No session for %s", position_params.text_document.uri)
            return None
        session.cursor.line = position_to_line(position_params.position)
        return session

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didOpen",
        default_factory=lambda: None,
    )
    def did_open(params: types.DidOpenTextDocumentParams) -> None:
        """Create a display session and activate it when auto-enabled."""
        uri = params.text_document.uri
        logger.debug("Document opened: %s", uri)

        session = _open_session(uri)
        if config.auto_enable:
            session.hooks.activate()

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/didClose",
        default_factory=lambda: None,
    )
    def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Tear down the session and forget the document's diagnostics."""
        uri = params.text_document.uri
        logger.debug("Document closed: %s", uri)

        session = sessions.pop(uri, None)
        if session is not None:
            session.close()
        store.clear(uri)

    @server.feature(PUBLISH_DIAGNOSTICS)
    @wrap_handler(
        logger=logger,
        feature_name=PUBLISH_DIAGNOSTICS,
        default_factory=lambda: None,
    )
    def publish_diagnostics(params: object) -> None:
        """Replace the diagnostics the client's linter reported for a document."""
        publish_params = structure_params(params, types.PublishDiagnosticsParams)
        store.publish(
            publish_params.uri,
            [from_lsp_diagnostic(d) for d in publish_params.diagnostics],
        )

    @server.feature(DID_MOVE_CURSOR)
    @wrap_handler(
        logger=logger,
        feature_name=DID_MOVE_CURSOR,
        default_factory=lambda: None,
    )
    def did_move_cursor(params: object) -> None:
        """Per-command cursor report from the client."""
        position_params = structure_params(params, types.TextDocumentPositionParams)
        session = sessions.get(position_params.text_document.uri)
        if session is None:
            return
        session.move_cursor(position_to_line(position_params.position))

    @server.feature(DID_CHANGE_BLOCKING_STATE)
    @wrap_handler(
        logger=logger,
        feature_name=DID_CHANGE_BLOCKING_STATE,
        default_factory=lambda: None,
    )
    def did_change_blocking_state(params: object) -> None:
        blocking.blocking = bool(get_field(params, "blocking", False))
        logger.debug("Blocking interaction: %s", blocking.blocking)

    @server.feature(SET_ACTIVE)
    @wrap_handler(
        logger=logger,
        feature_name=SET_ACTIVE,
        default_factory=lambda: None,
    )
    def set_active(params: object) -> None:
        """Explicitly enable or disable the display for a document."""
        uri = get_field(get_field(params, "textDocument"), "uri")
        if uri is None:
            return
        if get_field(params, "active", True):
            _open_session(uri).hooks.activate()
        else:
            session = sessions.get(uri)
            if session is not None:
                session.hooks.deactivate()

    @server.feature(NEXT_DIAGNOSTIC)
    @wrap_handler(
        logger=logger,
        feature_name=NEXT_DIAGNOSTIC,
        default_factory=lambda: None,
    )
    def next_diagnostic(params: object) -> types.Position | None:
        """Move to the next diagnostic line and show it immediately."""
        session = _positioned_session(params)
        if session is None:
            return None
        return session.hooks.navigate_next()

    @server.feature(PREVIOUS_DIAGNOSTIC)
    @wrap_handler(
        logger=logger,
        feature_name=PREVIOUS_DIAGNOSTIC,
        default_factory=lambda: None,
    )
    def previous_diagnostic(params: object) -> types.Position | None:
        """Move to the previous diagnostic line and show it immediately."""
        session = _positioned_session(params)
        if session is None:
            return None
        return session.hooks.navigate_previous()

    @server.feature(SHOW_DIAGNOSTICS)
    @wrap_handler(
        logger=logger,
        feature_name=SHOW_DIAGNOSTICS,
        default_factory=lambda: None,
    )
    def show_diagnostics(params: object) -> None:
        """Show the diagnostics at the given position without waiting."""
        session = _positioned_session(params)
        if session is not None:
            session.hooks.show_now()

    return server

"""Tests for the LSP server handlers.

Handlers are invoked directly through the feature manager with a fake
timer, so every debounce step is deterministic.
"""

from __future__ import annotations

from typing import Any

import pytest
from lsprotocol import types

import linehint.lsp.server as server_mod
from linehint.config import DisplayConfig
from tests.helpers.timer import FakeTimer

URI = "file:///project/module.py"


def _position_params(line: int, uri: str = URI) -> dict[str, Any]:
    return {
        "textDocument": {"uri": uri},
        "position": {"line": line, "character": 0},
    }


def _lsp_diagnostic(line: int, message: str, **extra: Any) -> dict[str, Any]:
    return {
        "range": {
            "start": {"line": line, "character": 0},
            "end": {"line": line, "character": 1},
        },
        "message": message,
        **extra,
    }


class ServerHarness:
    """A configured server plus helpers to drive its handlers."""

    def __init__(self, mocker, config: DisplayConfig | None = None) -> None:
        self.timer = FakeTimer()
        self.server = server_mod.create_server(
            config=config or DisplayConfig(delay_seconds=1.0), timer=self.timer
        )
        self.show_message = mocker.patch.object(
            self.server, "window_show_message", autospec=True
        )
        self.show_document = mocker.patch.object(
            self.server, "window_show_document", autospec=True
        )

    def call(self, method: str, params: Any) -> Any:
        return self.server.protocol.fm.features[method](params)

    def open(self, uri: str = URI) -> None:
        self.call(
            types.TEXT_DOCUMENT_DID_OPEN,
            types.DidOpenTextDocumentParams(
                text_document=types.TextDocumentItem(
                    uri=uri, language_id="python", version=1, text=""
                )
            ),
        )

    def close(self, uri: str = URI) -> None:
        self.call(
            types.TEXT_DOCUMENT_DID_CLOSE,
            types.DidCloseTextDocumentParams(
                text_document=types.TextDocumentIdentifier(uri=uri)
            ),
        )

    def publish(self, *diagnostics: dict[str, Any], uri: str = URI) -> None:
        self.call(
            server_mod.PUBLISH_DIAGNOSTICS,
            {"uri": uri, "diagnostics": list(diagnostics)},
        )

    def move(self, line: int, uri: str = URI) -> None:
        self.call(server_mod.DID_MOVE_CURSOR, _position_params(line, uri))

    @property
    def messages(self) -> list[str]:
        return [call.args[0].message for call in self.show_message.call_args_list]


@pytest.fixture
def harness(mocker) -> ServerHarness:
    harness = ServerHarness(mocker)
    harness.open()
    harness.publish(
        _lsp_diagnostic(2, "undefined name 'x'"),
        _lsp_diagnostic(2, "line too long"),
        _lsp_diagnostic(9, "unused variable"),
        _lsp_diagnostic(14, "", data={"locatable": False}),
    )
    return harness


class TestCreateServer:
    """Tests for create_server function."""

    def test_registers_features(self, mocker) -> None:
        """All linehint methods are registered."""
        harness = ServerHarness(mocker)
        features = harness.server.protocol.fm.features
        for method in (
            types.TEXT_DOCUMENT_DID_OPEN,
            types.TEXT_DOCUMENT_DID_CLOSE,
            server_mod.PUBLISH_DIAGNOSTICS,
            server_mod.DID_MOVE_CURSOR,
            server_mod.DID_CHANGE_BLOCKING_STATE,
            server_mod.SET_ACTIVE,
            server_mod.NEXT_DIAGNOSTIC,
            server_mod.PREVIOUS_DIAGNOSTIC,
            server_mod.SHOW_DIAGNOSTICS,
        ):
            assert method in features


class TestCursorMovement:
    """Debounced display driven by linehint/didMoveCursor."""

    def test_shows_after_delay(self, harness: ServerHarness) -> None:
        """Resting on a diagnostic line shows its first diagnostic once."""
        harness.move(2)
        assert harness.messages == []

        harness.timer.advance(1.0)

        assert harness.messages == ["undefined name 'x'"]
        params = harness.show_message.call_args.args[0]
        assert params.type == types.MessageType.Info

    def test_quick_moves_show_last_line_only(self, harness: ServerHarness) -> None:
        """Moving on before the delay cancels the earlier line."""
        harness.move(2)
        harness.timer.advance(0.5)
        harness.move(9)
        harness.timer.advance(1.0)

        assert harness.messages == ["unused variable"]

    def test_clean_line_shows_nothing(self, harness: ServerHarness) -> None:
        """Moving to a clean line before the delay shows nothing."""
        harness.move(2)
        harness.move(5)
        harness.timer.advance(5.0)

        assert harness.messages == []

    def test_unlocatable_fallback(self, harness: ServerHarness) -> None:
        """Unlocatable diagnostics show the fallback with a 1-based line."""
        harness.move(14)
        harness.timer.advance(1.0)

        assert harness.messages == ["compile error, problem on line 15"]

    def test_unbounded_config(self, mocker) -> None:
        """With no per-line limit every diagnostic is shown."""
        harness = ServerHarness(
            mocker, DisplayConfig(delay_seconds=1.0, max_per_line=None)
        )
        harness.open()
        harness.publish(_lsp_diagnostic(0, "a"), _lsp_diagnostic(0, "b"))

        harness.move(0)
        harness.timer.advance(1.0)

        assert harness.messages == ["a\nb"]

    def test_unknown_document_is_ignored(self, harness: ServerHarness) -> None:
        """Cursor reports for unopened documents do nothing."""
        harness.move(2, uri="file:///elsewhere.py")
        harness.timer.advance(5.0)

        assert harness.messages == []

    def test_malformed_params_do_not_raise(self, harness: ServerHarness) -> None:
        """A malformed cursor report is logged and ignored."""
        harness.call(server_mod.DID_MOVE_CURSOR, {"position": "nowhere"})
        assert harness.messages == []


class TestBlockingState:
    """linehint/didChangeBlockingState handling."""

    def test_deferred_until_unblocked(self, harness: ServerHarness) -> None:
        """Messages wait while the client reports a modal interaction."""
        harness.move(9)
        harness.call(server_mod.DID_CHANGE_BLOCKING_STATE, {"blocking": True})
        harness.timer.advance(3.0)
        assert harness.messages == []

        harness.call(server_mod.DID_CHANGE_BLOCKING_STATE, {"blocking": False})
        harness.timer.advance(1.0)

        assert harness.messages == ["unused variable"]

    def test_navigation_while_blocked_is_retried(self, harness: ServerHarness) -> None:
        """A jump during a modal prompt shows its message after the prompt."""
        harness.call(server_mod.DID_CHANGE_BLOCKING_STATE, {"blocking": True})

        result = harness.call(server_mod.NEXT_DIAGNOSTIC, _position_params(3))

        assert result == types.Position(line=9, character=0)
        assert harness.messages == []

        harness.call(server_mod.DID_CHANGE_BLOCKING_STATE, {"blocking": False})
        harness.timer.advance(1.0)

        assert harness.messages == ["unused variable"]

    def test_show_diagnostics_while_blocked_is_retried(
        self, harness: ServerHarness
    ) -> None:
        """linehint/showDiagnostics during a modal prompt is deferred, not dropped."""
        harness.call(server_mod.DID_CHANGE_BLOCKING_STATE, {"blocking": True})
        harness.call(server_mod.SHOW_DIAGNOSTICS, _position_params(2))
        harness.timer.advance(2.0)
        assert harness.messages == []

        harness.call(server_mod.DID_CHANGE_BLOCKING_STATE, {"blocking": False})
        harness.timer.advance(1.0)

        assert harness.messages == ["undefined name 'x'"]


class TestNavigation:
    """linehint/nextDiagnostic and linehint/previousDiagnostic."""

    def test_next_moves_and_shows_immediately(self, harness: ServerHarness) -> None:
        """Navigation moves the client cursor and shows without delay."""
        result = harness.call(server_mod.NEXT_DIAGNOSTIC, _position_params(3))

        assert result == types.Position(line=9, character=0)
        assert harness.messages == ["unused variable"]
        show_params = harness.show_document.call_args.args[0]
        assert show_params.uri == URI
        assert show_params.selection.start == types.Position(line=9, character=0)

    def test_failing_show_message_keeps_result(self, harness: ServerHarness) -> None:
        """A failed message write does not change the navigation answer."""
        harness.show_message.side_effect = RuntimeError("client gone")

        result = harness.call(server_mod.NEXT_DIAGNOSTIC, _position_params(3))

        assert result == types.Position(line=9, character=0)
        harness.show_document.assert_called_once()

    def test_previous(self, harness: ServerHarness) -> None:
        """Backward navigation finds the previous diagnostic line."""
        result = harness.call(server_mod.PREVIOUS_DIAGNOSTIC, _position_params(9))

        assert result == types.Position(line=2, character=0)
        assert harness.messages == ["undefined name 'x'"]

    def test_navigation_cancels_pending(self, harness: ServerHarness) -> None:
        """A pending debounced message is dropped by navigation."""
        harness.move(2)
        harness.call(server_mod.NEXT_DIAGNOSTIC, _position_params(2))
        harness.timer.advance(5.0)

        assert harness.messages == ["unused variable"]

    def test_no_further_diagnostic(self, harness: ServerHarness) -> None:
        """At the last diagnostic the cursor stays and its line is shown."""
        result = harness.call(server_mod.NEXT_DIAGNOSTIC, _position_params(14))

        assert result is None
        harness.show_document.assert_not_called()
        assert harness.messages == ["compile error, problem on line 15"]

    def test_unknown_document(self, harness: ServerHarness) -> None:
        """Navigation in an unknown document returns null."""
        result = harness.call(
            server_mod.NEXT_DIAGNOSTIC, _position_params(0, uri="file:///x.py")
        )
        assert result is None

    def test_show_diagnostics(self, harness: ServerHarness) -> None:
        """linehint/showDiagnostics shows the line at once."""
        harness.call(server_mod.SHOW_DIAGNOSTICS, _position_params(2))
        assert harness.messages == ["undefined name 'x'"]


class TestActivation:
    """Activation through didOpen, setActive and didClose."""

    def test_no_auto_enable(self, mocker) -> None:
        """Without auto-enable nothing is shown until setActive."""
        harness = ServerHarness(
            mocker, DisplayConfig(delay_seconds=1.0, auto_enable=False)
        )
        harness.open()
        harness.publish(_lsp_diagnostic(0, "boom"))

        harness.move(0)
        harness.timer.advance(5.0)
        assert harness.messages == []

        harness.call(
            server_mod.SET_ACTIVE, {"textDocument": {"uri": URI}, "active": True}
        )
        harness.move(0)
        harness.timer.advance(1.0)
        assert harness.messages == ["boom"]

    def test_set_inactive_cancels_pending(self, harness: ServerHarness) -> None:
        """Deactivating drops the pending message and stops listening."""
        harness.move(2)
        harness.call(
            server_mod.SET_ACTIVE, {"textDocument": {"uri": URI}, "active": False}
        )
        harness.timer.advance(5.0)
        harness.move(9)
        harness.timer.advance(5.0)

        assert harness.messages == []

    def test_set_active_twice(self, harness: ServerHarness) -> None:
        """Repeated activation does not duplicate messages."""
        params = {"textDocument": {"uri": URI}, "active": True}
        harness.call(server_mod.SET_ACTIVE, params)
        harness.call(server_mod.SET_ACTIVE, params)

        harness.move(9)
        harness.timer.advance(1.0)

        assert harness.messages == ["unused variable"]

    def test_close_cancels_and_forgets(self, harness: ServerHarness) -> None:
        """Closing a document cancels its timer and drops its diagnostics."""
        harness.move(2)
        harness.close()
        harness.timer.advance(5.0)
        assert harness.messages == []

        harness.open()
        harness.move(2)
        harness.timer.advance(5.0)
        assert harness.messages == []

    def test_documents_are_independent(self, harness: ServerHarness) -> None:
        """Each document has its own session and timer."""
        other = "file:///project/other.py"
        harness.open(other)
        harness.publish(_lsp_diagnostic(0, "other problem"), uri=other)

        harness.move(2)
        harness.move(0, uri=other)
        harness.timer.advance(1.0)

        assert sorted(harness.messages) == ["other problem", "undefined name 'x'"]

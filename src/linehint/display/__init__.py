"""Cursor-driven diagnostic display core."""

from linehint.display.extractor import DiagnosticLineExtractor
from linehint.display.formatter import format_diagnostic, format_diagnostics
from linehint.display.hooks import CommandEventStream, HookAdapter, with_after_effect
from linehint.display.presenter import Presenter
from linehint.display.scheduler import DebounceScheduler, SessionState
from linehint.display.types import Diagnostic, LineDiagnostics, PresentOutcome

__all__ = [
    "CommandEventStream",
    "DebounceScheduler",
    "Diagnostic",
    "DiagnosticLineExtractor",
    "HookAdapter",
    "LineDiagnostics",
    "PresentOutcome",
    "Presenter",
    "SessionState",
    "format_diagnostic",
    "format_diagnostics",
    "with_after_effect",
]

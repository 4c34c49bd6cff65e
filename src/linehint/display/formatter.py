"""Message formatting for line diagnostics."""

from __future__ import annotations

from collections.abc import Iterable

from linehint.display.types import Diagnostic

__all__ = ["format_diagnostic", "format_diagnostics"]


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Return the display text for one diagnostic."""
    if diagnostic.locatable:
        return diagnostic.text
    return f"compile error, problem on line {diagnostic.line}"


def format_diagnostics(diagnostics: Iterable[Diagnostic]) -> str:
    """
    Join the display text of diagnostics, one per line, in input order.

    Args:
        diagnostics: Non-empty diagnostics for a single line.

    Returns:
        Newline-separated message text.
    """
    return "\n".join(format_diagnostic(diagnostic) for diagnostic in diagnostics)

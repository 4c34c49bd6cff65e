"""In-memory diagnostics engine fed by client-published diagnostics."""

from __future__ import annotations

import bisect
from collections.abc import Iterable

from linehint.display.types import Diagnostic
from linehint.logging import get_logger

__all__ = ["DiagnosticStore", "DocumentDiagnostics"]


class DiagnosticStore:
    """Diagnostics per document URI, kept in the order they were reported."""

    def __init__(self) -> None:
        self._by_uri: dict[str, tuple[Diagnostic, ...]] = {}
        self._logger = get_logger("lsp.store")

    def publish(self, uri: str, diagnostics: Iterable[Diagnostic]) -> None:
        """Replace the diagnostics of a document."""
        self._by_uri[uri] = tuple(diagnostics)
        self._logger.debug(
            "Stored %d diagnostics for %s", len(self._by_uri[uri]), uri
        )

    def clear(self, uri: str) -> None:
        self._by_uri.pop(uri, None)

    def get(self, uri: str) -> tuple[Diagnostic, ...]:
        return self._by_uri.get(uri, ())

    def for_document(self, uri: str) -> DocumentDiagnostics:
        """Return the engine view of one document."""
        return DocumentDiagnostics(self, uri)


class DocumentDiagnostics:
    """Engine view of a single document, always reading the latest publish."""

    def __init__(self, store: DiagnosticStore, uri: str) -> None:
        self._store = store
        self.uri = uri

    def query_diagnostics(self, line: int) -> list[Diagnostic]:
        """Return the diagnostics on a 1-based line, in reported order."""
        return [d for d in self._store.get(self.uri) if d.line == line]

    def next_line(self, line: int) -> int | None:
        """First line after ``line`` carrying a diagnostic, if any."""
        lines = self._lines()
        index = bisect.bisect_right(lines, line)
        return lines[index] if index < len(lines) else None

    def previous_line(self, line: int) -> int | None:
        """Last line before ``line`` carrying a diagnostic, if any."""
        lines = self._lines()
        index = bisect.bisect_left(lines, line)
        return lines[index - 1] if index > 0 else None

    def _lines(self) -> list[int]:
        return sorted({d.line for d in self._store.get(self.uri)})

"""LSP host for the diagnostic display core."""

from linehint.lsp.server import create_server
from linehint.lsp.store import DiagnosticStore
from linehint.lsp.timer import AsyncioTimer

__all__ = [
    "AsyncioTimer",
    "DiagnosticStore",
    "create_server",
]

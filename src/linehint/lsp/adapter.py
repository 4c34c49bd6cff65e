"""Adapter module for converting between internal types and LSP protocol types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lsprotocol import converters, types

from linehint.display.types import Diagnostic

__all__ = [
    "from_lsp_diagnostic",
    "get_field",
    "line_to_position",
    "position_to_line",
    "structure_params",
]

_converter = converters.get_converter()


def position_to_line(position: types.Position) -> int:
    """Convert a 0-based LSP position to a 1-based editor line."""
    return position.line + 1


def line_to_position(line: int) -> types.Position:
    """Convert a 1-based editor line to the LSP position at its start."""
    return types.Position(line=max(line - 1, 0), character=0)


def from_lsp_diagnostic(diagnostic: types.Diagnostic) -> Diagnostic:
    """
    Convert an LSP diagnostic to an internal diagnostic.

    A diagnostic is unlocatable when its message is blank or its ``data``
    carries ``{"locatable": false}``.

    Args:
        diagnostic: LSP diagnostic as published by the client.

    Returns:
        Internal diagnostic anchored to the start line of its range.
    """
    data = diagnostic.data
    flagged = isinstance(data, Mapping) and data.get("locatable") is False
    locatable = bool(diagnostic.message.strip()) and not flagged
    return Diagnostic(
        text=diagnostic.message,
        line=position_to_line(diagnostic.range.start),
        locatable=locatable,
    )


def _to_plain(value: Any) -> Any:
    """Recursively turn decoded JSON-RPC params into plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: _to_plain(item) for key, item in value.items()}
    if hasattr(value, "_asdict"):
        return {key: _to_plain(item) for key, item in value._asdict().items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if hasattr(value, "__attrs_attrs__"):
        return _converter.unstructure(value)
    return value


def structure_params(params: Any, params_type: type[Any]) -> Any:
    """
    Structure the params of a custom method into an lsprotocol type.

    Args:
        params: Params as delivered by the JSON-RPC layer.
        params_type: Target lsprotocol class.

    Returns:
        Instance of params_type.
    """
    if isinstance(params, params_type):
        return params
    return _converter.structure(_to_plain(params), params_type)


def get_field(params: Any, name: str, default: Any = None) -> Any:
    """Read a top-level field from decoded params."""
    if isinstance(params, Mapping):
        return params.get(name, default)
    return getattr(params, name, default)

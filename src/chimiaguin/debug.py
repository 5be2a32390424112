"""Token stream dumps for the CLI and debugging."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from chimiaguin.tokens import PAYLOAD_TYPES, Interpolation, Token


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one human-readable line per token to *file*."""
    for tok in tokens:
        file.write(_format_token(tok))
        file.write("\n")


def _format_token(tok: Token) -> str:
    if tok.span is not None:
        where = f"{tok.span.start.line}:{tok.span.start.column}"
    else:
        where = "?:?"
    line = f"{where:<8}{tok.type.name}"
    if tok.type in PAYLOAD_TYPES:
        line += f"  {_format_value(tok.value)}"
    return line


def _format_value(value: object) -> str:
    if isinstance(value, Interpolation):
        return f"{value.prefix!r} #{{{value.expression}}}"
    return repr(value)


def tokens_to_json(tokens: list[Token]) -> list[dict[str, Any]]:
    """Return JSON-ready records for *tokens*."""
    records = []
    for tok in tokens:
        value: Any = tok.value
        if isinstance(value, Interpolation):
            value = {"prefix": value.prefix, "expression": value.expression}
        record: dict[str, Any] = {"type": tok.type.name, "value": value, "raw": tok.raw}
        if tok.span is not None:
            record["line"] = tok.span.start.line
            record["column"] = tok.span.start.column
            record["offset"] = tok.span.start.offset
        records.append(record)
    return records

"""Diagnostic type with formatted source context."""

from __future__ import annotations

from chimiaguin.tokens import Position, Span


class LexError(Exception):
    """A lexical problem found in the source, with span and source context.

    The lexer itself never raises; instances are produced by
    ``collect_errors`` and raised or reported by callers.
    """

    def __init__(
        self,
        message: str,
        span: Span,
        source: str,
        *,
        warning: bool = False,
        filename: str = "input.chi",
    ) -> None:
        self.message = message
        self.span = span
        self.source = source
        self.warning = warning
        self.filename = filename
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        return self.span.start

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        # Only \n breaks lines, matching the lexer's line counting
        lines = self.source.split("\n")
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx]
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        label = "warning" if self.warning else "error"
        return (
            f"{label}: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )

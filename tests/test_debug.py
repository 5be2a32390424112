"""Tests for the token dump helpers."""

from __future__ import annotations

import io

from chimiaguin.debug import dump_tokens, tokens_to_json
from chimiaguin.lexer import tokenize
from chimiaguin.tokens import Token, TokenType


class TestDumpTokens:
    def test_one_line_per_token(self) -> None:
        buf = io.StringIO()
        dump_tokens(tokenize("a + 1"), file=buf)
        lines = buf.getvalue().splitlines()
        assert len(lines) == 6
        assert lines[0].split() == ["1:1", "IDENTIFIER", "'a'"]
        assert lines[2].split() == ["1:3", "PLUS"]
        assert lines[-1].split() == ["1:6", "EOF"]

    def test_interpolation_line(self) -> None:
        buf = io.StringIO()
        dump_tokens(tokenize('"hi #{name}"'), file=buf)
        first = buf.getvalue().splitlines()[0]
        assert "INTERPOLATION" in first
        assert "'hi ' #{name}" in first

    def test_token_without_span(self) -> None:
        buf = io.StringIO()
        dump_tokens([Token(TokenType.COMMA)], file=buf)
        assert buf.getvalue().split() == ["?:?", "COMMA"]


class TestTokensToJson:
    def test_records(self) -> None:
        records = tokens_to_json(tokenize(":key"))
        assert records == [
            {"type": "SYMBOL", "value": "key", "raw": ":key", "line": 1, "column": 1, "offset": 0},
            {"type": "EOF", "value": None, "raw": "", "line": 1, "column": 5, "offset": 4},
        ]

    def test_interpolation_value(self) -> None:
        records = tokens_to_json(tokenize('"a#{b}"'))
        assert records[0]["value"] == {"prefix": "a", "expression": "b"}

    def test_number_value(self) -> None:
        records = tokens_to_json(tokenize("12"))
        assert records[0]["value"] == 12

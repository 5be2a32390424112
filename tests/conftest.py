"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from chimiaguin.lexer import Lexer, tokenize
from chimiaguin.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


def pull(source: str, count: int) -> list[Token]:
    """Call next_token() exactly *count* times on a fresh lexer."""
    lexer = Lexer(source)
    return [lexer.next_token() for _ in range(count)]


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"

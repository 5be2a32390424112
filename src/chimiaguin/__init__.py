"""Chimiaguin language front end: a pull-based lexer for a Ruby-like language."""

from __future__ import annotations

from chimiaguin.errors import LexError
from chimiaguin.lexer import Lexer, collect_errors, tokenize
from chimiaguin.tokens import Interpolation, Position, Span, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "Interpolation",
    "LexError",
    "Lexer",
    "Position",
    "Span",
    "Token",
    "TokenType",
    "collect_errors",
    "tokenize",
]

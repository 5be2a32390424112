"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple


class TokenType(Enum):
    # Literals (carry a payload)
    IDENTIFIER = auto()  # letter+
    NUMBER = auto()  # digit+ -> int
    TEXT = auto()  # '...' or "..." without interpolation
    SYMBOL = auto()  # :name
    INTERPOLATION = auto()  # "prefix#{expression}..."

    # Structural
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # ,
    COLON = auto()  # :
    ARROW = auto()  # =>

    # Operators
    PLUS = auto()  # +
    MINUS = auto()  # -
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    PERCENT = auto()  # %
    EQUAL = auto()  # =
    EQUAL_EQUAL = auto()  # ==
    EQUAL_EQUAL_EQUAL = auto()  # ===
    LESS_THAN = auto()  # <
    LESS_EQUAL = auto()  # <=
    GREATER_THAN = auto()  # >
    GREATER_EQUAL = auto()  # >=

    # Whitespace (one character each)
    WHITESPACE = auto()  # single space
    NEWLINE = auto()  # single \n

    EOF = auto()
    ILLEGAL = auto()  # value is the offending character


PAYLOAD_TYPES = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.NUMBER,
        TokenType.TEXT,
        TokenType.SYMBOL,
        TokenType.INTERPOLATION,
        TokenType.ILLEGAL,
    }
)


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


class Interpolation(NamedTuple):
    """Payload of an interpolated string: literal prefix and embedded expression."""

    prefix: str
    expression: str


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    Only ``type`` and ``value`` take part in equality; ``raw`` (the lexeme)
    and ``span`` are carried for diagnostics.
    """

    type: TokenType
    value: str | int | Interpolation | None = None
    raw: str = field(default="", compare=False)
    span: Span | None = field(default=None, compare=False)

    def __repr__(self) -> str:
        if self.type in PAYLOAD_TYPES:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"


def is_letter(ch: str) -> bool:
    """Return True if ch starts or continues an identifier or symbol name."""
    return ch.isalpha()


def is_digit(ch: str) -> bool:
    """Return True if ch continues a number literal."""
    return ch.isnumeric()

"""Chimiaguin lexer — pulls tokens one at a time from source text."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from chimiaguin.errors import LexError
from chimiaguin.tokens import (
    Interpolation,
    Position,
    Span,
    Token,
    TokenType,
    is_digit,
    is_letter,
)

logger = logging.getLogger(__name__)

# Largest value a NUMBER token may hold; larger literals are coerced to 0.
INT_MAX = 2**31 - 1

# Longest literal echoed verbatim in diagnostics and log records.
_ECHO_LIMIT = 20

_SINGLE_CHAR_TOKENS = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    " ": TokenType.WHITESPACE,
    "\n": TokenType.NEWLINE,
}


class Lexer:
    """Tokenize Chimiaguin source text on demand.

    Usage::

        lexer = Lexer(source)
        while (tok := lexer.next_token()).type != TokenType.EOF:
            ...

    Once the input is exhausted every call returns EOF. Problems the token
    stream only encodes implicitly (illegal characters, unterminated strings,
    out-of-range integers) are recorded in ``errors``; the lexer never raises.
    """

    def __init__(self, source: str, filename: str = "input.chi") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._ch = source[0] if source else ""
        self._errors: list[LexError] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def position(self) -> Position:
        """Position of the next unconsumed character."""
        return self._current_pos()

    @property
    def at_end(self) -> bool:
        return self._ch == ""

    @property
    def errors(self) -> list[LexError]:
        """Problems recorded so far, in source order."""
        return list(self._errors)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return

    def next_token(self) -> Token:
        """Scan and return the next token, advancing past its lexeme."""
        start = self._current_pos()
        ch = self._ch

        if ch == "":
            return self._make(TokenType.EOF, None, start)

        tt = _SINGLE_CHAR_TOKENS.get(ch)
        if tt is not None:
            self._advance()
            return self._make(tt, None, start)

        if ch == "=":
            return self._lex_equals(start)

        if ch == "<":
            return self._lex_comparison(start, TokenType.LESS_THAN, TokenType.LESS_EQUAL)

        if ch == ">":
            return self._lex_comparison(start, TokenType.GREATER_THAN, TokenType.GREATER_EQUAL)

        if ch == ":":
            return self._lex_colon(start)

        if ch in "'\"":
            return self._lex_string(start)

        if is_letter(ch):
            name = self._read_while(is_letter)
            return self._make(TokenType.IDENTIFIER, name, start)

        if is_digit(ch):
            return self._lex_number(start)

        self._advance()
        logger.debug("illegal character %r at %d:%d", ch, start.line, start.column)
        tok = self._make(TokenType.ILLEGAL, ch, start)
        self._record(f"illegal character {ch!r}", tok.span)
        return tok

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek_next(self) -> str:
        idx = self._pos + 1
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._ch
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        self._ch = self._source[self._pos] if self._pos < len(self._source) else ""
        return ch

    def _read_while(self, pred: Callable[[str], bool]) -> str:
        chars = []
        while pred(self._ch):
            chars.append(self._advance())
        return "".join(chars)

    def _make(self, tt: TokenType, value: str | int | Interpolation | None, start: Position) -> Token:
        raw = self._source[start.offset : self._pos]
        return Token(tt, value, raw, Span(start, self._current_pos()))

    def _record(self, message: str, span: Span, *, warning: bool = False) -> None:
        self._errors.append(
            LexError(message, span, self._source, warning=warning, filename=self._filename)
        )

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _lex_equals(self, start: Position) -> Token:
        self._advance()  # consume =
        if self._ch == "=":
            self._advance()
            if self._ch == "=":
                self._advance()
                return self._make(TokenType.EQUAL_EQUAL_EQUAL, None, start)
            return self._make(TokenType.EQUAL_EQUAL, None, start)
        if self._ch == ">":
            self._advance()
            return self._make(TokenType.ARROW, None, start)
        return self._make(TokenType.EQUAL, None, start)

    def _lex_comparison(self, start: Position, plain: TokenType, or_equal: TokenType) -> Token:
        self._advance()  # consume < or >
        if self._ch == "=":
            self._advance()
            return self._make(or_equal, None, start)
        return self._make(plain, None, start)

    def _lex_colon(self, start: Position) -> Token:
        self._advance()  # consume :
        if is_letter(self._ch):
            name = self._read_while(is_letter)
            return self._make(TokenType.SYMBOL, name, start)
        return self._make(TokenType.COLON, None, start)

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _lex_number(self, start: Position) -> Token:
        digits = self._read_while(is_digit)
        value: int | None = None
        if not digits.isdecimal():
            message = f"invalid integer literal {_abbreviate(digits)!r}"
        else:
            # ASCII digits without leading zeros; length is checked before int()
            significant = "".join(str(int(c)) for c in digits).lstrip("0") or "0"
            if len(significant) <= len(str(INT_MAX)) and int(significant) <= INT_MAX:
                value = int(significant)
            message = f"integer literal {_abbreviate(digits)} does not fit in 32 bits"

        if value is None:
            logger.warning("%s at %d:%d, using 0", message, start.line, start.column)
            tok = self._make(TokenType.NUMBER, 0, start)
            self._record(message, tok.span, warning=True)
            return tok
        return self._make(TokenType.NUMBER, value, start)

    def _lex_string(self, start: Position) -> Token:
        """Scan a quoted literal; double quotes may carry a #{...} marker."""
        quote = self._advance()
        chars = []
        while self._ch and self._ch != quote:
            if quote == '"' and self._ch == "#" and self._peek_next() == "{":
                return self._lex_interpolation(start, "".join(chars))
            chars.append(self._advance())

        if self._ch == quote:
            self._advance()
            return self._make(TokenType.TEXT, "".join(chars), start)

        tok = self._make(TokenType.TEXT, "".join(chars), start)
        self._record("unterminated string literal", tok.span)
        return tok

    def _lex_interpolation(self, start: Position, prefix: str) -> Token:
        expression, closed = self._lex_embedded()
        if not closed:
            tok = self._make(TokenType.INTERPOLATION, Interpolation(prefix, expression), start)
            self._record("unterminated interpolation in string literal", tok.span)
            return tok

        # Consume the rest of the literal; it only survives in the raw lexeme.
        while self._ch and self._ch != '"':
            if self._ch == "#" and self._peek_next() == "{":
                _, closed = self._lex_embedded()
                if not closed:
                    break
            else:
                self._advance()

        terminated = self._ch == '"'
        if terminated:
            self._advance()
        tok = self._make(TokenType.INTERPOLATION, Interpolation(prefix, expression), start)
        if not terminated:
            if closed:
                self._record("unterminated string literal", tok.span)
            else:
                self._record("unterminated interpolation in string literal", tok.span)
        return tok

    def _lex_embedded(self) -> tuple[str, bool]:
        """Read a #{...} marker, returning (expression text, closed)."""
        self._advance()  # consume #
        self._advance()  # consume {
        depth = 1
        chars = []
        while self._ch:
            if self._ch == "{":
                depth += 1
            elif self._ch == "}":
                depth -= 1
                if depth == 0:
                    self._advance()
                    return "".join(chars), True
            chars.append(self._advance())
        return "".join(chars), False


def tokenize(
    source: str,
    filename: str = "input.chi",
    *,
    skip_whitespace: bool = False,
) -> list[Token]:
    """Convenience function: tokenize source text through the first EOF."""
    tokens = list(Lexer(source, filename))
    if skip_whitespace:
        tokens = drop_whitespace(tokens)
    return tokens


def drop_whitespace(tokens: list[Token]) -> list[Token]:
    """Return *tokens* without WHITESPACE and NEWLINE tokens."""
    return [t for t in tokens if t.type not in (TokenType.WHITESPACE, TokenType.NEWLINE)]


def collect_errors(source: str, filename: str = "input.chi") -> list[LexError]:
    """Lex the whole source and return every recorded problem."""
    lexer = Lexer(source, filename)
    for _ in lexer:
        pass
    return lexer.errors


def _abbreviate(text: str) -> str:
    if len(text) <= _ECHO_LIMIT:
        return text
    return f"{text[:_ECHO_LIMIT]}... ({len(text)} characters)"

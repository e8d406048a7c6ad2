"""Lexer for the Sprout scripting language.

Produces tokens on demand from source text. Whitespace and ``//`` line
comments are skipped; characters outside the token alphabet come back as
LEX_ERROR tokens so the caller decides how to report them.
"""

from __future__ import annotations

from collections.abc import Iterator

from sprout.errors import LexError
from sprout.source import Span
from sprout.tokens import KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenKind


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_ident_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


class Lexer:
    """Tokenizes Sprout source code one token at a time."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens lazily, ending with (and including) EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == TokenKind.EOF:
                return

    def lex(self) -> list[Token]:
        """Tokenize the entire source. Raises LexError on a bad character."""
        tokens = list(self)
        for tok in tokens:
            if tok.kind == TokenKind.LEX_ERROR:
                raise LexError(f"unexpected character {tok.value!r}", tok.span)
        return tokens

    def next_token(self) -> Token:
        self._skip_trivia()
        start_line = self.line
        start_col = self.col

        if self.pos >= len(self.source):
            return self._make(TokenKind.EOF, "", start_line, start_col)

        ch = self.source[self.pos]
        if _is_digit(ch):
            return self._lex_number()
        if _is_ident_start(ch):
            return self._lex_identifier()

        self._advance()
        kind = SINGLE_CHAR_TOKENS.get(ch, TokenKind.LEX_ERROR)
        return self._make(kind, ch, start_line, start_col)

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _make(
        self,
        kind: TokenKind,
        value: str,
        start_line: int,
        start_col: int,
        number: float | None = None,
    ) -> Token:
        end_col = max(start_col, self.col - 1)
        span = Span(self.filename, start_line, start_col, self.line, end_col)
        return Token(kind, value, span, number)

    def _skip_trivia(self) -> None:
        """Skip whitespace and line comments."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in (' ', '\t', '\r', '\n'):
                self._advance()
            elif ch == '/' and self._peek(1) == '/':
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
            else:
                return

    # ── Numbers ──────────────────────────────────────────────────

    def _lex_number(self) -> Token:
        start_line = self.line
        start_col = self.col
        start = self.pos
        while _is_digit(self._peek()):
            self._advance()
        # Fractional part only when a digit follows the dot
        if self._peek() == '.' and _is_digit(self._peek(1)):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()
        text = self.source[start:self.pos]
        return self._make(TokenKind.NUMBER, text, start_line, start_col, float(text))

    # ── Identifiers and keywords ─────────────────────────────────

    def _lex_identifier(self) -> Token:
        start_line = self.line
        start_col = self.col
        start = self.pos
        while _is_ident_char(self._peek()):
            self._advance()
        text = self.source[start:self.pos]
        kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
        return self._make(kind, text, start_line, start_col)

"""Parser for the Sprout scripting language.

Recursive descent over a lazily produced token stream with a single token
of lookahead. Each precedence level is one method; lower levels call the
next-higher one, so operator precedence falls out of the call structure.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import NoReturn

from sprout.ast_nodes import (
    Assign,
    BinaryOp,
    Block,
    Identifier,
    If,
    Node,
    Number,
    Print,
    UnaryOp,
    While,
)
from sprout.errors import LexError, ParseError
from sprout.source import Span
from sprout.tokens import KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenKind

# '<' and '>' share the additive level, one below '*' and '/'.
_COMPARISON_LEVEL = frozenset({
    TokenKind.PLUS, TokenKind.MINUS, TokenKind.LESS, TokenKind.GREATER,
})
_TERM_LEVEL = frozenset({TokenKind.STAR, TokenKind.SLASH})

# Parentheses, unary minus and blocks each open one level.
MAX_NESTING = 100

_KIND_TEXT: dict[TokenKind, str] = {
    **{kind: f"'{ch}'" for ch, kind in SINGLE_CHAR_TOKENS.items()},
    **{kind: f"'{word}'" for word, kind in KEYWORDS.items()},
    TokenKind.NUMBER: "number",
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.EOF: "end of input",
}


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    return repr(tok.value)


class Parser:
    """Builds one statement AST at a time from a token stream.

    ``tokens`` is usually a :class:`~sprout.lexer.Lexer`, which is consumed
    on demand. With ``interactive=True`` a bare expression is accepted as a
    statement and the final ``;`` before end of input may be left out.
    """

    def __init__(self, tokens: Iterable[Token], *, interactive: bool = False) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self.interactive = interactive
        self.current = next(self._tokens)
        self._depth = 0

    # ── Token access ─────────────────────────────────────────────

    @property
    def at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def _at(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def _advance(self) -> Token:
        tok = self.current
        if tok.kind != TokenKind.EOF:
            self.current = next(self._tokens)
        return tok

    def _expect(self, kind: TokenKind) -> Token:
        if self._at(kind):
            return self._advance()
        self._fail(_KIND_TEXT[kind])

    def _fail(self, expected: str) -> NoReturn:
        tok = self.current
        if tok.kind == TokenKind.LEX_ERROR:
            raise LexError(f"unexpected character {tok.value!r}", tok.span)
        raise ParseError(f"expected {expected}, got {_describe(tok)}", tok.span)

    @contextmanager
    def _nested(self, tok: Token) -> Iterator[None]:
        if self._depth >= MAX_NESTING:
            raise ParseError(
                f"nested too deeply (more than {MAX_NESTING} levels)", tok.span,
            )
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    @staticmethod
    def _span(start: Span, end: Span) -> Span:
        return Span(
            start.file,
            start.start_line, start.start_col,
            end.end_line, end.end_col,
        )

    # ── Statements ───────────────────────────────────────────────

    def parse_program(self) -> Iterator[Node]:
        """Yield statements one at a time until end of input."""
        while not self.at_end:
            yield self.parse_statement()

    def parse_statement(self) -> Node:
        tok = self.current

        if tok.kind == TokenKind.LET:
            self._advance()
            name_tok = self._expect(TokenKind.IDENTIFIER)
            return self._finish_assign(tok, name_tok)

        if tok.kind == TokenKind.PRINT:
            self._advance()
            self._expect(TokenKind.LPAREN)
            expr = self.parse_expression()
            end = self._expect(TokenKind.RPAREN)
            self._expect_terminator()
            return Print(expr, self._span(tok.span, end.span))

        if tok.kind in (TokenKind.IF, TokenKind.WHILE):
            self._advance()
            self._expect(TokenKind.LPAREN)
            condition = self.parse_expression()
            self._expect(TokenKind.RPAREN)
            body = self._parse_block()
            node_cls = If if tok.kind == TokenKind.IF else While
            return node_cls(condition, body, self._span(tok.span, body.span))

        if tok.kind == TokenKind.IDENTIFIER:
            self._advance()
            if self._at(TokenKind.EQUALS) or not self.interactive:
                return self._finish_assign(tok, tok)
            # Identifier-led expression: the name is the first operand
            first = Identifier(tok.value, tok.span)
            expr = self._parse_comparison(self._parse_term(first))
            self._expect_terminator()
            return expr

        if self.interactive:
            expr = self.parse_expression()
            self._expect_terminator()
            return expr

        self._fail("statement")

    def _finish_assign(self, start: Token, name_tok: Token) -> Assign:
        self._expect(TokenKind.EQUALS)
        value = self.parse_expression()
        self._expect_terminator()
        return Assign(name_tok.value, value, self._span(start.span, value.span))

    def _expect_terminator(self) -> None:
        if self._at(TokenKind.SEMICOLON):
            self._advance()
        elif not (self.interactive and self.at_end):
            self._fail("';'")

    def _parse_block(self) -> Block:
        start = self._expect(TokenKind.LBRACE)
        statements: list[Node] = []
        with self._nested(start):
            while not self._at(TokenKind.RBRACE) and not self.at_end:
                statements.append(self.parse_statement())
        end = self._expect(TokenKind.RBRACE)
        return Block(statements, self._span(start.span, end.span))

    # ── Expressions ──────────────────────────────────────────────

    def parse_expression(self) -> Node:
        return self._parse_comparison()

    def _parse_comparison(self, left: Node | None = None) -> Node:
        if left is None:
            left = self._parse_term()
        while self.current.kind in _COMPARISON_LEVEL:
            op_tok = self._advance()
            right = self._parse_term()
            left = BinaryOp(op_tok.value, left, right, self._span(left.span, right.span))
        return left

    def _parse_term(self, left: Node | None = None) -> Node:
        if left is None:
            left = self._parse_factor()
        while self.current.kind in _TERM_LEVEL:
            op_tok = self._advance()
            right = self._parse_factor()
            left = BinaryOp(op_tok.value, left, right, self._span(left.span, right.span))
        return left

    def _parse_factor(self) -> Node:
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self._advance()
            return Number(tok.number, tok.span)

        if tok.kind == TokenKind.IDENTIFIER:
            self._advance()
            return Identifier(tok.value, tok.span)

        if tok.kind == TokenKind.LPAREN:
            self._advance()
            with self._nested(tok):
                expr = self.parse_expression()
            self._expect(TokenKind.RPAREN)
            return expr

        if tok.kind == TokenKind.MINUS:
            self._advance()
            with self._nested(tok):
                operand = self._parse_factor()
            return UnaryOp('-', operand, self._span(tok.span, operand.span))

        self._fail("expression")

"""Token kinds and token representation for the Sprout lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sprout.source import Span


class TokenKind(Enum):
    # Literals
    NUMBER = auto()

    # Identifiers
    IDENTIFIER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    EQUALS = auto()
    LESS = auto()
    GREATER = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    SEMICOLON = auto()
    COMMA = auto()

    # Keywords
    LET = auto()
    IF = auto()
    WHILE = auto()
    PRINT = auto()

    # Special
    EOF = auto()
    LEX_ERROR = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str
    span: Span
    number: float | None = None  # only set for NUMBER


KEYWORDS: dict[str, TokenKind] = {
    "let": TokenKind.LET,
    "if": TokenKind.IF,
    "while": TokenKind.WHILE,
    "print": TokenKind.PRINT,
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "=": TokenKind.EQUALS,
    "<": TokenKind.LESS,
    ">": TokenKind.GREATER,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
}

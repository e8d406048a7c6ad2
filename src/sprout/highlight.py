"""Pygments lexer for the Sprout scripting language."""

from pygments.lexer import RegexLexer, words
from pygments.token import Comment, Error, Keyword, Name, Number, Operator, Punctuation, Text


class SproutLexer(RegexLexer):
    """Pygments lexer for the Sprout scripting language."""

    name = "Sprout"
    aliases = ["sprout"]
    filenames = ["*.sp"]
    mimetypes = ["text/x-sprout"]

    tokens = {
        "root": [
            (r"\s+", Text),
            (r"//.*$", Comment.Single),
            (r"[0-9]+\.[0-9]+", Number.Float),
            (r"[0-9]+", Number.Integer),
            (words(("let",), prefix=r"\b", suffix=r"\b"), Keyword.Declaration),
            (words(("if", "while"), prefix=r"\b", suffix=r"\b"), Keyword),
            (words(("print",), prefix=r"\b", suffix=r"\b"), Name.Builtin),
            (r"[A-Za-z_][A-Za-z0-9_]*", Name),
            (r"[+\-*/<>=]", Operator),
            (r"[(){};,]", Punctuation),
            (r".", Error),
        ],
    }

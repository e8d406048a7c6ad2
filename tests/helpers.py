"""Shared test helpers for the Sprout test suite."""

from __future__ import annotations

import io

from sprout.ast_nodes import Node
from sprout.environment import Environment
from sprout.evaluator import Evaluator
from sprout.interpreter import Interpreter
from sprout.lexer import Lexer
from sprout.parser import Parser


def parse_expr(source: str) -> Node:
    """Parse a bare expression and assert nothing is left over."""
    parser = Parser(Lexer(source, "<test>"))
    expr = parser.parse_expression()
    assert parser.at_end, f"trailing input after expression: {parser.current}"
    return expr


def parse_all(source: str) -> list[Node]:
    """Parse a whole program into its statements."""
    return list(Parser(Lexer(source, "<test>")).parse_program())


def eval_expr(source: str, env: Environment | None = None) -> float:
    """Evaluate a bare expression in a fresh (or given) environment."""
    return Evaluator(io.StringIO()).evaluate(
        parse_expr(source), env if env is not None else Environment(),
    )


def run(source: str) -> tuple[Interpreter, str]:
    """Run a program, returning the interpreter and everything it printed."""
    out = io.StringIO()
    interp = Interpreter(out=out)
    interp.run(source, "<test>")
    return interp, out.getvalue()

"""Drives the lexer, parser and evaluator over whole programs or REPL lines."""

from __future__ import annotations

import logging
from typing import TextIO

from sprout.ast_nodes import Node
from sprout.environment import Environment
from sprout.errors import NestingTooDeep
from sprout.evaluator import Evaluator
from sprout.lexer import Lexer
from sprout.parser import Parser

logger = logging.getLogger(__name__)


class Interpreter:
    """Holds the Environment that persists across ``run``/``eval_line`` calls.

    Statements are parsed and evaluated one at a time, so output from
    statements before a failing one has already been written when a
    SproutError propagates.
    """

    def __init__(self, out: TextIO | None = None, env: Environment | None = None) -> None:
        self.env = env if env is not None else Environment()
        self.evaluator = Evaluator(out)

    def run(self, source: str, filename: str = "<stdin>") -> float:
        """Execute a whole program. Returns the last statement's value."""
        parser = Parser(Lexer(source, filename))
        result = 0.0
        for stmt in parser.parse_program():
            result = self._execute(stmt)
        return result

    def eval_line(self, line: str, filename: str = "<repl>") -> float | None:
        """Execute one interactive line. Returns None if it held no statement."""
        parser = Parser(Lexer(line, filename), interactive=True)
        result = None
        for stmt in parser.parse_program():
            result = self._execute(stmt)
        return result

    def _execute(self, stmt: Node) -> float:
        logger.debug("evaluating %s at %s", type(stmt).__name__, stmt.span)
        try:
            return self.evaluator.evaluate(stmt, self.env)
        except RecursionError:
            raise NestingTooDeep(
                "expression too deeply nested to evaluate", stmt.span,
            ) from None

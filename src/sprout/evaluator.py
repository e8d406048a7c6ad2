"""Tree-walking evaluator for Sprout ASTs."""

from __future__ import annotations

import sys
from typing import TextIO

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
from sprout.environment import Environment
from sprout.errors import DivisionByZero


def format_value(value: float) -> str:
    """Numbers are always shown with two decimals."""
    return f"{value:.2f}"


class Evaluator:
    """Evaluates nodes against an Environment, writing ``print`` output to ``out``."""

    def __init__(self, out: TextIO | None = None) -> None:
        self.out = out if out is not None else sys.stdout

    def evaluate(self, node: Node, env: Environment) -> float:
        if isinstance(node, Number):
            return node.value
        if isinstance(node, Identifier):
            return env.get(node.name, node.span)
        if isinstance(node, BinaryOp):
            return self._eval_binary(node, env)
        if isinstance(node, UnaryOp):
            return -self.evaluate(node.operand, env)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.set(node.name, value)
            return value
        if isinstance(node, Print):
            value = self.evaluate(node.expr, env)
            self.out.write(format_value(value) + "\n")
            return value
        if isinstance(node, If):
            if self.evaluate(node.condition, env) != 0:
                return self.evaluate(node.body, env)
            return 0.0
        if isinstance(node, While):
            result = 0.0
            while self.evaluate(node.condition, env) != 0:
                result = self.evaluate(node.body, env)
            return result
        if isinstance(node, Block):
            result = 0.0
            for stmt in node.statements:
                result = self.evaluate(stmt, env)
            return result
        raise TypeError(f"cannot evaluate {type(node).__name__}")

    def _eval_binary(self, node: BinaryOp, env: Environment) -> float:
        left = self.evaluate(node.left, env)
        right = self.evaluate(node.right, env)
        op = node.op
        if op == '+':
            return left + right
        if op == '-':
            return left - right
        if op == '*':
            return left * right
        if op == '/':
            if right == 0:
                raise DivisionByZero("division by zero", node.right.span)
            return left / right
        if op == '<':
            return 1.0 if left < right else 0.0
        if op == '>':
            return 1.0 if left > right else 0.0
        raise ValueError(f"unknown operator {op!r}")

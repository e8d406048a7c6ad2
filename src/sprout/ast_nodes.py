"""AST node definitions for the Sprout language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sprout.source import Span

# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Number:
    value: float
    span: Span


@dataclass(frozen=True)
class Identifier:
    name: str
    span: Span


@dataclass(frozen=True)
class BinaryOp:
    op: str  # one of + - * / < >
    left: Node
    right: Node
    span: Span


@dataclass(frozen=True)
class UnaryOp:
    op: str  # always '-'
    operand: Node
    span: Span


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Assign:
    """Both ``let x = e;`` and ``x = e;``."""

    name: str
    value: Node
    span: Span


@dataclass(frozen=True)
class Print:
    expr: Node
    span: Span


@dataclass(frozen=True)
class Block:
    statements: list[Node]
    span: Span


@dataclass(frozen=True)
class If:
    condition: Node
    body: Block
    span: Span


@dataclass(frozen=True)
class While:
    condition: Node
    body: Block
    span: Span


Node = Union[Number, Identifier, BinaryOp, UnaryOp, Assign, Print, If, While, Block]

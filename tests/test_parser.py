"""Tests for the Sprout parser."""

from __future__ import annotations

import pytest

from sprout.ast_nodes import (
    Assign,
    BinaryOp,
    Block,
    Identifier,
    If,
    Number,
    Print,
    UnaryOp,
    While,
)
from sprout.errors import LexError, ParseError
from sprout.lexer import Lexer
from sprout.parser import MAX_NESTING, Parser
from tests.helpers import parse_all, parse_expr


def parse_line(source: str):
    """Helper: parse interactive input, return all statements."""
    return list(Parser(Lexer(source, "<repl>"), interactive=True).parse_program())


def shape(node) -> object:
    """Strip spans so trees compare structurally."""
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, BinaryOp):
        return (node.op, shape(node.left), shape(node.right))
    if isinstance(node, UnaryOp):
        return (node.op, shape(node.operand))
    raise AssertionError(f"unexpected node {node!r}")


class TestExpressions:
    def test_number(self):
        node = parse_expr("42")
        assert isinstance(node, Number)
        assert node.value == 42.0

    def test_identifier(self):
        node = parse_expr("total")
        assert isinstance(node, Identifier)
        assert node.name == "total"

    def test_multiplication_binds_tighter(self):
        assert shape(parse_expr("2 + 3 * 4")) == ('+', 2.0, ('*', 3.0, 4.0))

    def test_parentheses_override(self):
        assert shape(parse_expr("(2 + 3) * 4")) == ('*', ('+', 2.0, 3.0), 4.0)

    def test_left_associative_subtraction(self):
        assert shape(parse_expr("10 - 4 - 3")) == ('-', ('-', 10.0, 4.0), 3.0)

    def test_left_associative_division(self):
        assert shape(parse_expr("8 / 4 / 2")) == ('/', ('/', 8.0, 4.0), 2.0)

    def test_unary_minus(self):
        assert shape(parse_expr("-5 + 3")) == ('+', ('-', 5.0), 3.0)

    def test_unary_minus_after_operator(self):
        assert shape(parse_expr("2 * -3")) == ('*', 2.0, ('-', 3.0))

    def test_double_negation(self):
        assert shape(parse_expr("--x")) == ('-', ('-', 'x'))

    def test_comparison_shares_additive_level(self):
        # chained left to right with + and -, below * and /
        assert shape(parse_expr("2 + 3 < 4 + 1")) == (
            '+', ('<', ('+', 2.0, 3.0), 4.0), 1.0,
        )

    def test_comparison_below_multiplication(self):
        assert shape(parse_expr("x > 2 * 3")) == ('>', 'x', ('*', 2.0, 3.0))

    def test_binary_span_covers_operands(self):
        node = parse_expr("1 + 22")
        assert (node.span.start_col, node.span.end_col) == (1, 6)


class TestStatements:
    def test_let(self):
        [stmt] = parse_all("let x = 5;")
        assert isinstance(stmt, Assign)
        assert stmt.name == "x"
        assert shape(stmt.value) == 5.0

    def test_let_and_reassign_are_same_node(self):
        let, assign = parse_all("let x = 1; x = x + 1;")
        assert type(let) is type(assign) is Assign
        assert shape(assign.value) == ('+', 'x', 1.0)

    def test_print(self):
        [stmt] = parse_all("print(1 + 2);")
        assert isinstance(stmt, Print)
        assert shape(stmt.expr) == ('+', 1.0, 2.0)

    def test_if(self):
        [stmt] = parse_all("if (s > 90) { print(1); }")
        assert isinstance(stmt, If)
        assert shape(stmt.condition) == ('>', 's', 90.0)
        assert isinstance(stmt.body, Block)
        assert len(stmt.body.statements) == 1

    def test_while(self):
        [stmt] = parse_all("while (x > 0) { print(x); x = x - 1; }")
        assert isinstance(stmt, While)
        assert [type(s) for s in stmt.body.statements] == [Print, Assign]

    def test_empty_block(self):
        [stmt] = parse_all("while (0) {}")
        assert stmt.body.statements == []

    def test_nested_blocks(self):
        [stmt] = parse_all("if (1) { while (x < 3) { x = x + 1; } }")
        inner = stmt.body.statements[0]
        assert isinstance(inner, While)

    def test_statement_span_lines(self):
        stmt = parse_all("let a = 1;\nwhile (a < 3) {\n  a = a + 1;\n}")[1]
        assert stmt.span.start_line == 2
        assert stmt.span.end_line == 4

    def test_program_is_parsed_lazily(self):
        parser = Parser(Lexer("let a = 1; let b = 2;"))
        program = parser.parse_program()
        first = next(program)
        assert first.name == "a"
        assert parser.current.value == "let"

    def test_comments_between_statements(self):
        stmts = parse_all("// setup\nlet x = 1; // one\n// done\n")
        assert len(stmts) == 1


class TestInteractive:
    def test_bare_expression(self):
        [stmt] = parse_line("2 + 3 * 4")
        assert shape(stmt) == ('+', 2.0, ('*', 3.0, 4.0))

    def test_identifier_expression(self):
        [stmt] = parse_line("x - 1")
        assert shape(stmt) == ('-', 'x', 1.0)

    def test_identifier_led_multiplication(self):
        [stmt] = parse_line("x * 2 + 1")
        assert shape(stmt) == ('+', ('*', 'x', 2.0), 1.0)

    def test_semicolon_optional_at_end(self):
        [stmt] = parse_line("let x = 5")
        assert isinstance(stmt, Assign)

    def test_several_statements(self):
        stmts = parse_line("let x = 1; x = 2; x")
        assert len(stmts) == 3

    def test_missing_separator(self):
        with pytest.raises(ParseError, match="expected ';'"):
            parse_line("2 3")

    def test_bare_expression_rejected_in_batch(self):
        with pytest.raises(ParseError, match="expected statement"):
            parse_all("2 + 3;")

    def test_identifier_expression_rejected_in_batch(self):
        with pytest.raises(ParseError, match="expected '='"):
            parse_all("x + 1;")


class TestParseErrors:
    def test_unmatched_paren(self):
        with pytest.raises(ParseError, match="expected '\\)', got end of input"):
            parse_expr("(1 + 2")

    def test_missing_semicolon(self):
        with pytest.raises(ParseError, match="expected ';'"):
            parse_all("let x = 1 let y = 2;")

    def test_missing_close_brace(self):
        with pytest.raises(ParseError, match="expected '}'"):
            parse_all("while (1) { x = 1;")

    def test_let_without_name(self):
        with pytest.raises(ParseError, match="expected identifier, got '='"):
            parse_all("let = 4;")

    def test_print_needs_parens(self):
        with pytest.raises(ParseError, match="expected '\\('"):
            parse_all("print 5;")

    def test_if_requires_block(self):
        with pytest.raises(ParseError, match="expected '{'"):
            parse_all("if (1) print(1);")

    def test_missing_operand(self):
        with pytest.raises(ParseError, match="expected expression, got ';'"):
            parse_all("let x = 1 + ;")

    def test_error_carries_location(self):
        with pytest.raises(ParseError) as exc:
            parse_all("let a = 1;\nlet b = (2;")
        span = exc.value.span
        assert (span.start_line, span.start_col) == (2, 11)
        assert exc.value.diagnostic.code == "E200"

    def test_bad_character_reported_as_lex_error(self):
        with pytest.raises(LexError, match="unexpected character '\\$'"):
            parse_all("let x = $;")

    def test_statements_before_error_are_returned(self):
        parser = Parser(Lexer("let a = 1; let = 2;"))
        program = parser.parse_program()
        assert next(program).name == "a"
        with pytest.raises(ParseError):
            next(program)


class TestNesting:
    def test_parentheses_at_limit(self):
        source = "(" * MAX_NESTING + "1" + ")" * MAX_NESTING
        assert shape(parse_expr(source)) == 1.0

    def test_parentheses_past_limit(self):
        source = "(" * (MAX_NESTING + 1) + "1" + ")" * (MAX_NESTING + 1)
        with pytest.raises(ParseError, match="nested too deeply") as exc:
            parse_expr(source)
        assert exc.value.span.start_col == MAX_NESTING + 1

    def test_deep_unary_minus(self):
        with pytest.raises(ParseError, match="nested too deeply"):
            parse_expr("-" * 400 + "1")

    def test_deep_blocks(self):
        with pytest.raises(ParseError, match="nested too deeply"):
            parse_all("if (1) {" * 400 + "}" * 400)

    def test_depth_resets_between_statements(self):
        inner = "(" * MAX_NESTING + "1" + ")" * MAX_NESTING
        assert len(parse_all(f"print({inner}); print({inner});")) == 2

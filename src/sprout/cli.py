"""Sprout interpreter CLI."""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from pathlib import Path

import click

from sprout import __version__
from sprout.ast_nodes import Node
from sprout.config import SproutConfig, find_config, load_config
from sprout.errors import DiagnosticRenderer, NestingTooDeep, SproutError
from sprout.interpreter import Interpreter
from sprout.lexer import Lexer
from sprout.parser import Parser
from sprout.source import SourceFile
from sprout.tokens import TokenKind

logger = logging.getLogger(__name__)


def _load_source(file: str | None, source_text: str | None) -> SourceFile:
    if file is not None and source_text is not None:
        raise click.UsageError("give either FILE or --eval SOURCE, not both")
    if source_text is not None:
        return SourceFile(source_text, "<eval>")
    if file is None:
        raise click.UsageError("give a FILE, '-' for stdin, or --eval SOURCE")
    if file == "-":
        return SourceFile(click.get_text_stream("stdin").read(), "<stdin>")
    return SourceFile.from_path(Path(file))


def _report(error: SproutError, source: SourceFile, color: bool) -> None:
    renderer = DiagnosticRenderer(color=color)
    renderer.add_source(source)
    click.echo(renderer.render(error.diagnostic), err=True)


def _listing(source: SourceFile, color: bool) -> str:
    if not color:
        return source.content
    from pygments import highlight
    from pygments.formatters import TerminalFormatter

    from sprout.highlight import SproutLexer

    return highlight(source.content, SproutLexer(), TerminalFormatter())


@click.group()
@click.version_option(__version__, prog_name="sprout")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to sprout.toml (default: search upward from cwd).",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """The Sprout scripting language interpreter."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if config_path is not None:
        ctx.obj = load_config(Path(config_path))
    else:
        try:
            ctx.obj = load_config(find_config())
        except FileNotFoundError:
            ctx.obj = SproutConfig()
    logger.debug("config: %s", ctx.obj)


@main.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("-e", "--eval", "source_text", default=None, help="Run SOURCE instead of a file.")
@click.option("--echo/--no-echo", default=None, help="Print the program listing before its output.")
@click.option("--color/--no-color", default=None, help="Colorize listings and diagnostics.")
@click.pass_obj
def run(
    config: SproutConfig,
    file: str | None,
    source_text: str | None,
    echo: bool | None,
    color: bool | None,
) -> None:
    """Run a Sprout program."""
    source = _load_source(file, source_text)
    if echo is None:
        echo = config.run.echo
    if color is None:
        color = config.diagnostics.color

    if echo:
        click.echo("Program:")
        click.echo(_listing(source, color).rstrip("\n"), color=color)
        click.echo("\nOutput:")

    interpreter = Interpreter()
    try:
        interpreter.run(source.content, source.name)
    except SproutError as e:
        _report(e, source, color)
        raise SystemExit(1)


@main.command()
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
@click.pass_obj
def repl(config: SproutConfig, color: bool | None) -> None:
    """Start an interactive session."""
    from sprout.repl import Repl

    if color is None:
        color = config.diagnostics.color
    shell = Repl(
        color=color,
        prompt=config.repl.prompt,
        banner=config.repl.banner,
    )
    shell.cmdloop()
    click.echo("Goodbye!")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def tokens(file: str) -> None:
    """Show the token stream of a Sprout source file."""
    source = _load_source(file, None)
    had_errors = False
    for tok in Lexer(source.content, source.name):
        line = f"{tok.kind.name:<12}'{tok.value:<15}'"
        if tok.kind == TokenKind.NUMBER:
            line += f" (value: {tok.number:.2f})"
        click.echo(f"{tok.span.start_line:>4}  {line}")
        if tok.kind == TokenKind.LEX_ERROR:
            had_errors = True
    if had_errors:
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--color/--no-color", default=None, help="Colorize diagnostics.")
@click.pass_obj
def view(config: SproutConfig, file: str, color: bool | None) -> None:
    """View the AST of a Sprout source file."""
    source = _load_source(file, None)
    if color is None:
        color = config.diagnostics.color

    try:
        for stmt in Parser(Lexer(source.content, source.name)).parse_program():
            try:
                _dump_ast(stmt, 0)
            except RecursionError:
                raise NestingTooDeep(
                    "statement too deeply nested to display", stmt.span,
                ) from None
    except SproutError as e:
        _report(e, source, color)
        raise SystemExit(1)


def _dump_ast(node: Node, depth: int) -> None:
    """Print a readable AST dump."""
    indent = "  " * depth
    click.echo(f"{indent}{type(node).__name__}")
    for field in fields(node):
        if field.name == "span":
            continue
        value = getattr(node, field.name)
        if isinstance(value, list):
            if value:
                click.echo(f"{indent}  {field.name}:")
                for item in value:
                    _dump_ast(item, depth + 2)
            else:
                click.echo(f"{indent}  {field.name}: []")
        elif is_dataclass(value):
            click.echo(f"{indent}  {field.name}:")
            _dump_ast(value, depth + 2)
        else:
            click.echo(f"{indent}  {field.name}: {value!r}")

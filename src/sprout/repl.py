"""Interactive line-oriented shell for Sprout. Uses cmd as backend."""

from __future__ import annotations

import cmd
import logging
from typing import TextIO

from sprout import __version__
from sprout.errors import DiagnosticRenderer, SproutError
from sprout.evaluator import format_value
from sprout.interpreter import Interpreter
from sprout.source import SourceFile

logger = logging.getLogger(__name__)


class Repl(cmd.Cmd):
    """Evaluates one line at a time against a persistent Environment."""

    intro = f"Sprout {__version__} :: type 'help' for more information, 'quit' to leave."
    prompt = "> "

    def __init__(
        self,
        interpreter: Interpreter | None = None,
        *,
        color: bool = False,
        prompt: str | None = None,
        banner: bool = True,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.interpreter = interpreter or Interpreter(out=self.stdout)
        self.color = color
        if prompt is not None:
            self.prompt = prompt
        if not banner:
            self.intro = None
        self.line_num = 0

    def default(self, line: str) -> None:
        """Executes a statement or expression and echoes its value."""
        self.line_num += 1
        name = f"<repl:{self.line_num}>"
        logger.debug("repl line %d: %r", self.line_num, line)
        try:
            result = self.interpreter.eval_line(line, name)
        except SproutError as e:
            renderer = DiagnosticRenderer(color=self.color)
            renderer.add_source(SourceFile(line, name))
            self.stdout.write(renderer.render(e.diagnostic) + "\n")
            return
        if result is not None:
            self.stdout.write(f"= {format_value(result)}\n")

    def emptyline(self) -> None:
        """Do not repeat previous command on empty line."""

    def do_vars(self, arg: str) -> None:
        """List variable bindings."""
        if arg:
            return self.default(f"vars {arg}")
        for name, value in self.interpreter.env.items():
            self.stdout.write(f"{name} = {format_value(value)}\n")

    def do_help(self, arg: str) -> None:
        """Short language summary."""
        if arg:
            return self.default(f"help {arg}")
        self.stdout.write(
            "Statements:\n"
            "  let x = value;          declare a variable\n"
            "  x = value;              assign to a variable\n"
            "  print(expr);            print a value\n"
            "  if (cond) { ... }       run the block when cond is non-zero\n"
            "  while (cond) { ... }    repeat the block while cond is non-zero\n"
            "  expr                    evaluate and show a value\n"
            "Commands: vars, quit, exit\n"
        )

    def do_quit(self, arg: str) -> bool | None:
        """Exits interpreter."""
        if arg:
            return self.default(f"quit {arg}")
        return True

    def do_exit(self, arg: str) -> bool | None:
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")
        return True

    def do_EOF(self, arg: str) -> bool | None:
        """Exits interpreter."""
        if arg:
            return self.default(f"EOF {arg}")
        self.stdout.write("\n")
        return True

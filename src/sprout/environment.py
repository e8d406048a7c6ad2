"""Variable bindings for a Sprout run or REPL session."""

from __future__ import annotations

import difflib
from collections.abc import Iterator

from sprout.errors import UndefinedVariable
from sprout.source import Span


class Environment:
    """A single global scope mapping names to numeric values.

    Blocks do not open scopes: a name assigned inside a loop body stays
    bound after the loop. There is no removal.
    """

    def __init__(self) -> None:
        self._values: dict[str, float] = {}

    def set(self, name: str, value: float) -> None:
        """Update the binding for ``name``, creating it if needed."""
        self._values[name] = value

    def get(self, name: str, span: Span | None = None) -> float:
        """Return the value bound to ``name``. Raises UndefinedVariable."""
        try:
            return self._values[name]
        except KeyError:
            raise UndefinedVariable(name, span, self._suggest(name)) from None

    def _suggest(self, name: str) -> list[str]:
        close = difflib.get_close_matches(name, self._values, n=1)
        if close:
            return [f"did you mean '{close[0]}'?"]
        return []

    def items(self) -> Iterator[tuple[str, float]]:
        """Bindings in the order they were first assigned."""
        return iter(self._values.items())

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Environment({self._values!r})"

"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """A range within a source file."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"


class SourceFile:
    """Program text with line access for diagnostics and listings."""

    def __init__(self, content: str, name: str = "<stdin>") -> None:
        self.name = name
        self.content = content
        self.lines = content.splitlines()

    @classmethod
    def from_path(cls, path: Path) -> SourceFile:
        return cls(path.read_text(), str(path))


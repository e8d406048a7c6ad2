"""TOML config loading for sprout.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_FILENAME = "sprout.toml"


@dataclass
class ReplConfig:
    prompt: str = "> "
    banner: bool = True


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class RunConfig:
    echo: bool = False


@dataclass
class SproutConfig:
    repl: ReplConfig = field(default_factory=ReplConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    run: RunConfig = field(default_factory=RunConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find sprout.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> SproutConfig:
    """Parse a sprout.toml file into a SproutConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = SproutConfig()

    if "repl" in data:
        repl = data["repl"]
        config.repl = ReplConfig(
            prompt=repl.get("prompt", "> "),
            banner=repl.get("banner", True),
        )

    if "diagnostics" in data:
        diag = data["diagnostics"]
        config.diagnostics = DiagnosticsConfig(
            color=diag.get("color", True),
        )

    if "run" in data:
        run = data["run"]
        config.run = RunConfig(
            echo=run.get("echo", False),
        )

    return config

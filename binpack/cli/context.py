from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from binpack.core.config import PackConfig, load_config_or_default
from binpack.core.errors import ErrorCode
from binpack.core.project import Project
from binpack.core.result import Err
from binpack.output.console import ConsoleProtocol, RichConsole

PROJECT_ENV = "BINPACK_PROJECT"
VERBOSE_ENV = "BINPACK_VERBOSE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: PackConfig
    console: ConsoleProtocol
    verbose: bool


def build_context(*, out: Path | None = None) -> CLIContext:
    verbose = os.environ.get(VERBOSE_ENV) == "1"
    console = RichConsole(verbose=verbose)

    root = Path(os.environ.get(PROJECT_ENV) or Path.cwd()).expanduser().resolve()
    if not root.is_dir():
        console.error(f"project directory not found: {root}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_config_or_default(Project(root=root).config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    npm_dir = (root / out) if out is not None else None
    return CLIContext(
        project=Project(root=root, config=config, npm_dir_override=npm_dir),
        config=config,
        console=console,
        verbose=verbose,
    )

from __future__ import annotations

import os
from pathlib import Path

import typer

from binpack import __version__
from binpack.cli.commands.build import build
from binpack.cli.commands.publish import publish
from binpack.cli.context import PROJECT_ENV, VERBOSE_ENV
from binpack.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(build)
app.command()(publish)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    project: Path | None = typer.Option(
        None,
        "--project",
        "-p",
        help="Project root holding the build output (default: current directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostic output."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if verbose:
        os.environ[VERBOSE_ENV] = "1"

    if project is not None:
        try:
            root = project.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --project: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --project '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ[PROJECT_ENV] = str(root)


def main() -> None:
    app()

from __future__ import annotations

from pathlib import Path

import typer

from binpack.cli.context import build_context
from binpack.core.errors import ErrorCode
from binpack.core.result import Err, Ok
from binpack.output.console import Style
from binpack.output.errors import pack_error_exit_code, print_pack_error
from binpack.services.build import BuildOptions, BuildService


def build(
    builder: str | None = typer.Option(
        None, "--builder", "-b", help="Builder ID to package (default: project name)"
    ),
    prefix: str | None = typer.Option(None, "--prefix", help="npm scope, e.g. @acme"),
    description: str | None = typer.Option(None, "--description", "-d", help="Package description"),
    files: list[str] | None = typer.Option(
        None, "--file", "-f", help="Extra file glob to ship in every package (repeatable)"
    ),
    keywords: list[str] | None = typer.Option(
        None, "--keyword", "-k", help="npm keyword (repeatable)"
    ),
    out: Path | None = typer.Option(None, "--out", help="Output directory for npm packages"),
) -> None:
    """Build platform packages and the umbrella package."""
    ctx = build_context(out=out)
    config = ctx.config
    options = BuildOptions(
        builder=builder or config.builder,
        prefix=prefix or config.prefix,
        description=description or config.description,
        files=tuple(files) if files else config.files,
        keywords=tuple(keywords) if keywords else config.keywords,
    )

    service = BuildService(project=ctx.project, console=ctx.console, verbose=ctx.verbose)
    try:
        result = service.build(options)
    except OSError as e:
        ctx.console.error(f"build aborted: {e}")
        ctx.console.print(f"output in {ctx.project.npm_dir} is incomplete", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    match result:
        case Ok(report):
            ctx.console.header(f"{report.metadata.project_name} {report.metadata.version}")
            for definition in report.packages:
                ctx.console.success(f"{definition.name} ({definition.os}/{definition.cpu})")
            ctx.console.success(str(report.umbrella_dir))
        case Err(error):
            print_pack_error(error, ctx.console)
            raise typer.Exit(code=pack_error_exit_code(error))

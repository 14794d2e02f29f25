from __future__ import annotations

import os
from pathlib import Path

import typer

from binpack.cli.context import build_context
from binpack.core.errors import ErrorCode
from binpack.core.result import Err, Ok
from binpack.npm.publish import PublishOptions
from binpack.output.console import Style
from binpack.services.publish import PublishService

TOKEN_ENV = "NPM_TOKEN"


def publish(
    tag: str | None = typer.Option(None, "--tag", "-t", help="npm dist-tag (e.g. next)"),
    token: str | None = typer.Option(
        None, "--token", help=f"npm auth token (default: ${TOKEN_ENV})"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without publishing."),
    out: Path | None = typer.Option(None, "--out", help="Directory holding built npm packages"),
) -> None:
    """Publish built packages to the npm registry."""
    ctx = build_context(out=out)
    service = PublishService(project=ctx.project, console=ctx.console, verbose=ctx.verbose)
    options = PublishOptions(tag=tag, token=token or os.environ.get(TOKEN_ENV))
    if dry_run:
        ctx.console.info("dry run: nothing is published")
    elif not options.token:
        ctx.console.warning(f"no token given and ${TOKEN_ENV} unset; using npm's own login")

    match service.publish_all(options, dry_run=dry_run):
        case Ok(published):
            ctx.console.newline()
            ctx.console.success(f"{len(published)} package(s) processed")
        case Err(error):
            ctx.console.error(error.message)
            if error.hint:
                ctx.console.print(f"hint: {error.hint}", Style.DIM)
            code = (
                ErrorCode.PUBLISH_ERROR if error.kind == "publish_failed" else ErrorCode.USER_ERROR
            )
            raise typer.Exit(code=int(code))

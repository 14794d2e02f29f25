from __future__ import annotations

from pathlib import Path

import pytest
import typer

from binpack.cli.context import CLIContext
from binpack.core.config import PackConfig
from binpack.core.errors import ErrorCode
from binpack.core.project import Project
from binpack.output.console import MockConsole


def _ctx(tmp_path: Path) -> CLIContext:
    return CLIContext(
        project=Project(root=tmp_path),
        config=PackConfig(),
        console=MockConsole(),
        verbose=False,
    )


def test_publish_without_build_exits_with_user_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import binpack.cli.commands.publish as publish_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(publish_cmd, "build_context", lambda **_: ctx)

    with pytest.raises(typer.Exit) as exc:
        publish_cmd.publish(tag=None, token=None, dry_run=True, out=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("hint: Run: binpack build")


def test_publish_dry_run_reports_count(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import binpack.cli.commands.publish as publish_cmd

    ctx = _ctx(tmp_path)
    umbrella = ctx.project.npm_dir / "mytool"
    umbrella.mkdir(parents=True)
    (umbrella / "package.json").write_text(
        '{"name": "mytool", "optionalDependencies": {}}', encoding="utf-8"
    )
    monkeypatch.setattr(publish_cmd, "build_context", lambda **_: ctx)

    publish_cmd.publish(tag=None, token=None, dry_run=True, out=None)

    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("info: dry run")
    assert ctx.console.find("OK 1 package(s) processed")

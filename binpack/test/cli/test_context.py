from __future__ import annotations

from pathlib import Path

import pytest
import typer

from binpack.cli.context import PROJECT_ENV, VERBOSE_ENV, build_context
from binpack.core.errors import ErrorCode


def test_build_context_reads_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "binpack.toml").write_text('prefix = "@acme"\n', encoding="utf-8")
    monkeypatch.setenv(PROJECT_ENV, str(tmp_path))
    monkeypatch.setenv(VERBOSE_ENV, "1")

    ctx = build_context()

    assert ctx.project.root == tmp_path.resolve()
    assert ctx.config.prefix == "@acme"
    assert ctx.verbose is True
    assert ctx.project.npm_dir == tmp_path.resolve() / "dist" / "npm"


def test_build_context_out_overrides_npm_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(PROJECT_ENV, str(tmp_path))
    monkeypatch.delenv(VERBOSE_ENV, raising=False)

    ctx = build_context(out=Path("packages"))

    assert ctx.project.npm_dir == tmp_path.resolve() / "packages"
    assert ctx.verbose is False


def test_build_context_broken_config_exits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "binpack.toml").write_text("prefix = \n", encoding="utf-8")
    monkeypatch.setenv(PROJECT_ENV, str(tmp_path))

    with pytest.raises(typer.Exit) as exc:
        build_context()

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_build_context_missing_project_exits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(PROJECT_ENV, str(tmp_path / "missing"))

    with pytest.raises(typer.Exit) as exc:
        build_context()

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)

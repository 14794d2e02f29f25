from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from binpack.core.result import Err, Ok
from binpack.npm.errors import InvalidExtraFile
from binpack.npm.metadata import find_files, parse_artifacts_file, parse_metadata
from binpack.npm.model import ReleaseMetadata, Runtime


def _write_json(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestParseArtifactsFile:
    def test_list(self, tmp_path: Path) -> None:
        entries = [{"name": "mytool", "path": "darwin_amd64/mytool", "builder": "mytool"}]
        path = _write_json(tmp_path / "artifacts.json", entries)

        assert parse_artifacts_file(path) == Ok(entries)

    def test_not_a_list(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "artifacts.json", {"name": "mytool"})

        result = parse_artifacts_file(path)

        assert isinstance(result, Err)
        assert "array" in result.error.reason

    def test_missing_file(self, tmp_path: Path) -> None:
        result = parse_artifacts_file(tmp_path / "artifacts.json")
        assert isinstance(result, Err)
        assert result.error.reason == "file not found"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "artifacts.json"
        path.write_text("[{", encoding="utf-8")

        result = parse_artifacts_file(path)

        assert isinstance(result, Err)
        assert "invalid JSON" in result.error.message


class TestParseMetadata:
    def test_full(self, tmp_path: Path) -> None:
        path = _write_json(
            tmp_path / "metadata.json",
            {
                "project_name": "mytool",
                "tag": "v1.2.3",
                "previous_tag": "v1.2.2",
                "version": "1.2.3",
                "commit": "abc123",
                "date": "2026-10-19T00:00:00Z",
                "runtime": {"goos": "linux", "goarch": "amd64"},
            },
        )

        assert parse_metadata(path) == Ok(
            ReleaseMetadata(
                project_name="mytool",
                tag="v1.2.3",
                previous_tag="v1.2.2",
                version="1.2.3",
                commit="abc123",
                date="2026-10-19T00:00:00Z",
                runtime=Runtime(goos="linux", goarch="amd64"),
            )
        )

    def test_version_falls_back_to_tag(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "metadata.json", {"project_name": "mytool", "tag": "v2.0.0"})

        result = parse_metadata(path)

        assert isinstance(result, Ok)
        assert result.value.version == "2.0.0"
        assert result.value.runtime == Runtime(goos="", goarch="")

    def test_requires_project_name(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "metadata.json", {"version": "1.0.0"})

        result = parse_metadata(path)

        assert isinstance(result, Err)
        assert "project_name" in result.error.reason

    def test_requires_a_version(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "metadata.json", {"project_name": "mytool"})
        assert isinstance(parse_metadata(path), Err)


def test_find_files(tmp_path: Path) -> None:
    (tmp_path / "README.md").write_text("readme", encoding="utf-8")
    (tmp_path / "LICENSE").write_text("mit", encoding="utf-8")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "usage.md").write_text("usage", encoding="utf-8")

    files = find_files(tmp_path, ["README.md", "docs/*.md", "*.md", "docs", "missing.txt"])

    assert files == Ok(["README.md", "docs/usage.md"])


def test_find_files_without_patterns(tmp_path: Path) -> None:
    assert find_files(tmp_path, []) == Ok([])


@pytest.mark.parametrize(
    ("pattern", "reason"),
    [
        ("/etc/passwd", "absolute patterns are not allowed"),
        ("C:\\Windows\\win.ini", "absolute patterns are not allowed"),
        ("../LICENSE", "pattern leaves the project root"),
        ("docs/../../*.md", "pattern leaves the project root"),
        ("  ", "empty pattern"),
    ],
)
def test_find_files_rejects_patterns_outside_root(
    tmp_path: Path, pattern: str, reason: str
) -> None:
    result = find_files(tmp_path, ["README.md", pattern])

    assert result == Err(InvalidExtraFile(path=pattern, reason=reason))


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_find_files_rejects_symlink_leaving_root(tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("secret", encoding="utf-8")
    root = tmp_path / "project"
    root.mkdir()
    (root / "secret.txt").symlink_to(outside / "secret.txt")

    result = find_files(root, ["*.txt"])

    assert isinstance(result, Err)
    assert result.error.path == "secret.txt"
    assert result.error.reason == "resolves outside the project root"

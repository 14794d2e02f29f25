"""Build descriptor loading (artifacts.json, metadata.json) and extra files.

This is thin I/O: it reads JSON and hands untyped entries to validation.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path, PurePosixPath, PureWindowsPath

from ..core.result import Err, Ok, Result
from ..core.structured import as_obj_list, as_str_dict, get_str, get_table
from .errors import DescriptorInvalid, InvalidExtraFile
from .model import ReleaseMetadata, Runtime


def _read_json(path: Path) -> Result[object, DescriptorInvalid]:
    try:
        return Ok(json.loads(path.read_text(encoding="utf-8")))
    except FileNotFoundError:
        return Err(DescriptorInvalid(path=path, reason="file not found"))
    except json.JSONDecodeError as e:
        return Err(DescriptorInvalid(path=path, reason=f"invalid JSON: {e}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(DescriptorInvalid(path=path, reason=str(e)))


def parse_artifacts_file(path: Path) -> Result[list[object], DescriptorInvalid]:
    """Load the raw artifact entries. Entries are validated later."""
    data = _read_json(path)
    if isinstance(data, Err):
        return data
    entries = as_obj_list(data.value)
    if entries is None:
        return Err(DescriptorInvalid(path=path, reason="expected a JSON array"))
    return Ok(entries)


def parse_metadata(path: Path) -> Result[ReleaseMetadata, DescriptorInvalid]:
    data = _read_json(path)
    if isinstance(data, Err):
        return data
    table = as_str_dict(data.value)
    if table is None:
        return Err(DescriptorInvalid(path=path, reason="expected a JSON object"))

    project_name = get_str(table, "project_name")
    if project_name is None:
        return Err(DescriptorInvalid(path=path, reason="missing project_name"))

    tag = get_str(table, "tag") or ""
    version = get_str(table, "version") or tag.removeprefix("v")
    if not version:
        return Err(DescriptorInvalid(path=path, reason="missing version and tag"))

    runtime = get_table(table, "runtime") or {}
    return Ok(
        ReleaseMetadata(
            project_name=project_name,
            tag=tag,
            previous_tag=get_str(table, "previous_tag") or "",
            version=version,
            commit=get_str(table, "commit") or "",
            date=get_str(table, "date") or "",
            runtime=Runtime(
                goos=get_str(runtime, "goos") or "",
                goarch=get_str(runtime, "goarch") or "",
            ),
        )
    )


def _pattern_problem(pattern: str) -> str | None:
    if not pattern.strip():
        return "empty pattern"
    posix = PurePosixPath(pattern.replace("\\", "/"))
    if posix.is_absolute() or PureWindowsPath(pattern).is_absolute():
        return "absolute patterns are not allowed"
    if ".." in posix.parts:
        return "pattern leaves the project root"
    return None


def find_files(root: Path, patterns: Iterable[str]) -> Result[list[str], InvalidExtraFile]:
    """Expand glob patterns relative to ``root`` into sorted relative paths.

    Directories are skipped; a pattern without matches contributes nothing.
    Absolute patterns, ``..`` segments and matches that resolve outside
    ``root`` (through a symlink) are rejected.
    """
    base = root.resolve()
    found: set[str] = set()
    for pattern in patterns:
        problem = _pattern_problem(pattern)
        if problem is not None:
            return Err(InvalidExtraFile(path=pattern, reason=problem))
        for p in root.glob(pattern):
            if not p.is_file():
                continue
            if not p.resolve().is_relative_to(base):
                return Err(
                    InvalidExtraFile(
                        path=p.relative_to(root).as_posix(),
                        reason="resolves outside the project root",
                    )
                )
            found.add(p.relative_to(root).as_posix())
    return Ok(sorted(found))

"""Artifact filtering and schema validation.

Validation is a pure function: it checks every entry and returns either the
typed artifacts or every issue it found, so a broken descriptor can be fixed
in one pass.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..core.result import Err, Ok, Result
from ..core.structured import as_str_dict, get_str, get_table
from .errors import ValidationIssue
from .model import Artifact

BINARY_TYPE = "Binary"

_REQUIRED_FIELDS = ("name", "path", "builder")
_OPTIONAL_FIELDS = ("goos", "goarch")


def artifact_builder(entry: object) -> str | None:
    """Builder tag of a raw descriptor entry.

    Accepts a top-level ``builder`` key or goreleaser's ``extra.ID``.
    """
    table = as_str_dict(entry)
    if table is None:
        return None
    builder = get_str(table, "builder")
    if builder is not None:
        return builder
    extra = get_table(table, "extra") or {}
    return get_str(extra, "ID")


def binary_artifact_predicate(builder: str) -> Callable[[object], bool]:
    """Predicate selecting binary artifacts produced by ``builder``."""

    def predicate(entry: object) -> bool:
        table = as_str_dict(entry)
        if table is None:
            return False
        kind = table.get("type")
        if kind is not None and kind != BINARY_TYPE:
            return False
        return artifact_builder(table) == builder

    return predicate


def _check_entry(index: int, entry: object) -> list[ValidationIssue]:
    table = as_str_dict(entry)
    if table is None:
        return [ValidationIssue(index, "<entry>", "must be an object")]

    issues: list[ValidationIssue] = []
    for name in _REQUIRED_FIELDS:
        value = artifact_builder(table) if name == "builder" else table.get(name)
        if value is None:
            issues.append(ValidationIssue(index, name, "required field is missing"))
        elif not isinstance(value, str):
            issues.append(ValidationIssue(index, name, "must be a string"))
        elif not value.strip():
            issues.append(ValidationIssue(index, name, "must not be empty"))

    path = table.get("path")
    if isinstance(path, str) and path.strip():
        segments = [s for s in path.replace("\\", "/").split("/") if s]
        if len(segments) < 2:
            issues.append(
                ValidationIssue(index, "path", "must contain a platform directory and a file name")
            )

    for name in _OPTIONAL_FIELDS:
        value = table.get(name)
        if value is not None and not isinstance(value, str):
            issues.append(ValidationIssue(index, name, "must be a string"))

    return issues


def _to_artifact(entry: object) -> Artifact:
    table = as_str_dict(entry) or {}
    return Artifact(
        name=get_str(table, "name") or "",
        path=(get_str(table, "path") or "").replace("\\", "/"),
        builder=artifact_builder(table) or "",
        goos=get_str(table, "goos"),
        goarch=get_str(table, "goarch"),
    )


def validate_binary_artifacts(
    entries: Sequence[object],
) -> Result[tuple[Artifact, ...], tuple[ValidationIssue, ...]]:
    issues: list[ValidationIssue] = []
    for index, entry in enumerate(entries):
        issues.extend(_check_entry(index, entry))

    if issues:
        return Err(tuple(issues))
    return Ok(tuple(_to_artifact(entry) for entry in entries))

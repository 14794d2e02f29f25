from __future__ import annotations

from binpack.core.result import Err, Ok
from binpack.npm.model import Artifact
from binpack.npm.validation import (
    artifact_builder,
    binary_artifact_predicate,
    validate_binary_artifacts,
)


def _entry(**overrides: object) -> dict[str, object]:
    entry: dict[str, object] = {
        "name": "mytool",
        "path": "darwin_amd64/mytool",
        "builder": "mytool",
    }
    entry.update(overrides)
    return entry


class TestPredicate:
    def test_matches_builder(self) -> None:
        predicate = binary_artifact_predicate("mytool")
        assert predicate(_entry())
        assert not predicate(_entry(builder="other"))

    def test_goreleaser_extra_id(self) -> None:
        entry = {
            "name": "mytool",
            "path": "dist/mytool_linux_amd64_v1/mytool",
            "type": "Binary",
            "extra": {"ID": "mytool"},
        }
        assert artifact_builder(entry) == "mytool"
        assert binary_artifact_predicate("mytool")(entry)

    def test_rejects_non_binary_types(self) -> None:
        predicate = binary_artifact_predicate("mytool")
        assert not predicate(_entry(type="Archive"))
        assert predicate(_entry(type="Binary"))

    def test_rejects_non_objects(self) -> None:
        predicate = binary_artifact_predicate("mytool")
        assert not predicate("mytool")
        assert not predicate(None)

    def test_entry_without_name_still_selected(self) -> None:
        entry = _entry()
        del entry["name"]
        assert binary_artifact_predicate("mytool")(entry)


class TestValidate:
    def test_valid_entries(self) -> None:
        result = validate_binary_artifacts(
            [_entry(), _entry(path="linux_arm64/mytool", goos="linux", goarch="arm64")]
        )

        assert result == Ok(
            (
                Artifact(name="mytool", path="darwin_amd64/mytool", builder="mytool"),
                Artifact(
                    name="mytool",
                    path="linux_arm64/mytool",
                    builder="mytool",
                    goos="linux",
                    goarch="arm64",
                ),
            )
        )

    def test_missing_name(self) -> None:
        entry = _entry()
        del entry["name"]

        result = validate_binary_artifacts([entry])

        assert isinstance(result, Err)
        assert [(i.index, i.field) for i in result.error] == [(0, "name")]
        assert "missing" in result.error[0].message
        assert str(result.error[0]) == "artifact[0].name: required field is missing"

    def test_collects_every_issue(self) -> None:
        result = validate_binary_artifacts(
            [
                _entry(name=""),
                _entry(path="mytool"),
                _entry(goos=1),
                "not an object",
            ]
        )

        assert isinstance(result, Err)
        assert [(i.index, i.field) for i in result.error] == [
            (0, "name"),
            (1, "path"),
            (2, "goos"),
            (3, "<entry>"),
        ]

    def test_windows_separators_normalized(self) -> None:
        result = validate_binary_artifacts([_entry(path="windows_amd64\\mytool.exe")])
        assert isinstance(result, Ok)
        assert result.value[0].path == "windows_amd64/mytool.exe"

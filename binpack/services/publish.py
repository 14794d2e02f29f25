from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from ..core.result import Err, Ok, Result
from ..core.structured import StrDict, as_str_dict, get_str, get_table
from ..npm.metadata import parse_metadata
from ..npm.package import MANIFEST_FILENAME
from ..npm.publish import PublishOptions, publish, publish_command
from ..output.console import Style
from .base import BaseService


@dataclass(frozen=True, slots=True)
class PublishError:
    kind: str
    message: str
    hint: str | None = None


def _read_manifest(path: Path) -> dict[str, object] | None:
    try:
        return as_str_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError):
        return None


def dependency_folder(name: str) -> str:
    """Directory of a package in the output tree; scoped names drop the scope."""
    return name.split("/", 1)[1] if name.startswith("@") and "/" in name else name


class PublishService(BaseService):
    """Publish a built npm tree: platform packages first, umbrella last.

    The umbrella's optional dependencies must exist on the registry before
    the umbrella is installable. Only the packages the umbrella declares are
    published; leftovers from earlier builds in the same tree are ignored.
    """

    def _find_umbrella(self, npm_dir: Path) -> Result[tuple[Path, StrDict], PublishError]:
        umbrellas: dict[Path, StrDict] = {}
        for package_dir in sorted(p for p in npm_dir.iterdir() if p.is_dir()):
            manifest = _read_manifest(package_dir / MANIFEST_FILENAME)
            if manifest is not None and get_table(manifest, "optionalDependencies") is not None:
                umbrellas[package_dir] = manifest

        if len(umbrellas) == 1:
            return Ok(next(iter(umbrellas.items())))
        if not umbrellas:
            return Err(
                PublishError(
                    kind="umbrella_missing",
                    message=f"no umbrella package found in {npm_dir}",
                    hint="Run: binpack build",
                )
            )

        metadata = parse_metadata(self._project.metadata_path)
        if isinstance(metadata, Ok):
            chosen = npm_dir / metadata.value.project_name
            if chosen in umbrellas:
                self._console.debug(f"Umbrella chosen from metadata: {chosen.name}")
                return Ok((chosen, umbrellas[chosen]))
        names = ", ".join(p.name for p in umbrellas)
        return Err(
            PublishError(
                kind="umbrella_ambiguous",
                message=f"several umbrella packages in {npm_dir}: {names}",
                hint="Remove stale packages or rebuild into an empty --out directory",
            )
        )

    def ordered_packages(self) -> Result[list[Path], PublishError]:
        npm_dir = self._project.npm_dir
        if not npm_dir.is_dir():
            return Err(
                PublishError(
                    kind="not_built",
                    message=f"npm output directory missing: {npm_dir}",
                    hint="Run: binpack build",
                )
            )

        found = self._find_umbrella(npm_dir)
        if isinstance(found, Err):
            return found
        umbrella_dir, manifest = found.value

        ordered: list[Path] = []
        for name in get_table(manifest, "optionalDependencies") or {}:
            package_dir = npm_dir / dependency_folder(name)
            if not (package_dir / MANIFEST_FILENAME).is_file():
                return Err(
                    PublishError(
                        kind="dependency_missing",
                        message=f"{name} is declared by {umbrella_dir.name} but not built",
                        hint=f"expected {package_dir / MANIFEST_FILENAME}",
                    )
                )
            ordered.append(package_dir)
        return Ok([*ordered, umbrella_dir])

    def publish_all(
        self, options: PublishOptions, *, dry_run: bool = False
    ) -> Result[list[Path], PublishError]:
        ordered = self.ordered_packages()
        if isinstance(ordered, Err):
            return ordered

        published: list[Path] = []
        for package_dir in ordered.value:
            manifest = _read_manifest(package_dir / MANIFEST_FILENAME) or {}
            name = get_str(manifest, "name") or package_dir.name
            self._console.print(f"{name}: {' '.join(publish_command(options))}", Style.DIM)
            if dry_run:
                published.append(package_dir)
                continue

            result = publish(package_dir, options)
            if isinstance(result, Err):
                return Err(
                    PublishError(
                        kind="publish_failed",
                        message=f"{name}: {result.error}",
                        hint=result.error.last_line,
                    )
                )
            self._console.success(name)
            published.append(package_dir)

        return Ok(published)

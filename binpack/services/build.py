"""Build the npm package tree from a multi-platform build.

Pipeline: load descriptors, filter and validate binary artifacts, plan every
package (definitions, duplicate check, dispatcher source), then write the
platform packages and finally the umbrella package.

Every domain error is detected during planning, before the first directory
is created. File-system errors are not caught: a failed run may leave a
partial tree, which must not be published.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..core.result import Err, Ok, Result
from ..npm.dispatcher import build_exec_script
from ..npm.errors import (
    DuplicatePlatform,
    EmptyArtifactSet,
    EmptyBinaryArtifactSet,
    InvalidBinaryArtifact,
    InvalidExtraFile,
    PackError,
)
from ..npm.metadata import find_files, parse_artifacts_file, parse_metadata
from ..npm.model import Artifact, PackageDefinition, ReleaseMetadata
from ..npm.package import (
    DISPATCHER_FILENAME,
    MANIFEST_FILENAME,
    format_main_package_json,
    format_package_json,
    transform_package,
    write_package_json,
)
from ..npm.validation import binary_artifact_predicate, validate_binary_artifacts
from ..platform.files import atomic_write_text, copy_file, make_executable, mkdir
from .base import BaseService


@dataclass(frozen=True, slots=True)
class BuildOptions:
    builder: str | None = None
    prefix: str | None = None
    description: str | None = None
    files: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PlannedPackage:
    artifact: Artifact
    definition: PackageDefinition


@dataclass(frozen=True, slots=True)
class BuildPlan:
    metadata: ReleaseMetadata
    packages: tuple[PlannedPackage, ...]
    files: tuple[str, ...]
    exec_script: str


@dataclass(frozen=True, slots=True)
class BuildReport:
    metadata: ReleaseMetadata
    packages: tuple[PackageDefinition, ...]
    umbrella_dir: Path
    package_dirs: tuple[Path, ...] = field(default=())


def find_duplicate_platform(
    planned: Sequence[PlannedPackage],
) -> DuplicatePlatform | None:
    seen: dict[str, list[str]] = {}
    for p in planned:
        seen.setdefault(p.definition.platform_key, []).append(p.artifact.path)
    for key, paths in seen.items():
        if len(paths) > 1:
            return DuplicatePlatform(platform_key=key, artifacts=tuple(paths))
    return None


def find_reserved_file(
    files: Sequence[str], planned: Sequence[PlannedPackage]
) -> InvalidExtraFile | None:
    """First extra file that would overwrite a generated file of some package."""
    reserved = {MANIFEST_FILENAME, DISPATCHER_FILENAME, *(p.definition.bin for p in planned)}
    for file in files:
        if file in reserved:
            return InvalidExtraFile(path=file, reason="would overwrite a generated package file")
    return None


class BuildService(BaseService):
    """Build platform packages and the umbrella package."""

    def build(self, options: BuildOptions) -> Result[BuildReport, PackError]:
        self._console.debug(f"Start build package in {self._project.root}")

        plan = self.plan(options)
        if isinstance(plan, Err):
            return plan

        package_dirs = [
            self._write_platform_package(p, plan.value, options) for p in plan.value.packages
        ]
        self._console.debug(f"Built {len(package_dirs)} platform package(s)")

        umbrella_dir = self._write_umbrella_package(plan.value, options)
        return Ok(
            BuildReport(
                metadata=plan.value.metadata,
                packages=tuple(p.definition for p in plan.value.packages),
                umbrella_dir=umbrella_dir,
                package_dirs=tuple(package_dirs),
            )
        )

    def plan(self, options: BuildOptions) -> Result[BuildPlan, PackError]:
        """Everything that can fail without touching the output directory."""
        artifacts_path = self._project.artifacts_path
        artifacts = parse_artifacts_file(artifacts_path)
        if isinstance(artifacts, Err):
            return artifacts
        if not artifacts.value:
            return Err(EmptyArtifactSet(path=artifacts_path))
        self._console.debug(f"Found {len(artifacts.value)} artifact(s)")

        metadata_result = parse_metadata(self._project.metadata_path)
        if isinstance(metadata_result, Err):
            return metadata_result
        metadata = metadata_result.value
        if self._verbose:
            self._log_metadata(metadata)

        builder = options.builder or metadata.project_name
        binary_entries = [a for a in artifacts.value if binary_artifact_predicate(builder)(a)]
        if not binary_entries:
            return Err(EmptyBinaryArtifactSet(builder=builder))

        validated = validate_binary_artifacts(binary_entries).map_err(
            lambda issues: InvalidBinaryArtifact(issues=issues)
        )
        if isinstance(validated, Err):
            return validated
        binaries = validated.value
        self._console.debug(f"Found {len(binaries)} binary artifact(s) from {builder} builder")

        found = find_files(self._project.root, options.files)
        if isinstance(found, Err):
            return found
        files = found.value
        if self._verbose:
            self._console.debug(f"Found {len(files)} extra file(s)")
            for file in files:
                self._console.debug(f"  {file}")

        planned: list[PlannedPackage] = []
        for artifact in binaries:
            definition = transform_package(artifact, metadata, files, options.keywords)
            if isinstance(definition, Err):
                return definition
            planned.append(PlannedPackage(artifact=artifact, definition=definition.value))

        duplicate = find_duplicate_platform(planned)
        if duplicate is not None:
            return Err(duplicate)

        clash = find_reserved_file(files, planned)
        if clash is not None:
            return Err(clash)

        script = build_exec_script([p.definition for p in planned], options.prefix)
        if isinstance(script, Err):
            return script

        return Ok(
            BuildPlan(
                metadata=metadata,
                packages=tuple(planned),
                files=tuple(files),
                exec_script=script.value,
            )
        )

    def _log_metadata(self, metadata: ReleaseMetadata) -> None:
        with self._console.group("Loaded metadata:"):
            self._console.debug(f"project_name: {metadata.project_name}")
            self._console.debug(f"tag: {metadata.tag}")
            self._console.debug(f"previous_tag: {metadata.previous_tag}")
            self._console.debug(f"version: {metadata.version}")
            self._console.debug(f"commit: {metadata.commit}")
            self._console.debug(f"date: {metadata.date}")
            self._console.debug(f"runtime_goos: {metadata.runtime.goos}")
            self._console.debug(f"runtime_goarch: {metadata.runtime.goarch}")

    def _copy_package_files(self, package: str, files: Sequence[str]) -> None:
        for file in files:
            copy_file(self._project.path(file), self._project.package_folder(package, file))

    def _write_platform_package(
        self, planned: PlannedPackage, plan: BuildPlan, options: BuildOptions
    ) -> Path:
        definition = planned.definition
        with self._console.group(f"Built package {definition.name}"):
            package_dir = self._project.package_folder(definition.name)
            mkdir(package_dir)
            self._console.debug(f"Created package path: {package_dir}")

            binary = self._project.npm_dir / definition.destination_binary
            copy_file(self._project.path(planned.artifact.path), binary)
            make_executable(binary)
            self._console.debug(f"Copied binary: {definition.destination_binary}")

            manifest = format_package_json(
                definition, options.description, options.prefix, plan.files, options.keywords
            )
            package_json = self._project.package_json(definition.name)
            write_package_json(package_json, manifest)
            self._console.debug(f"Written package json file: {package_json}")

            self._copy_package_files(definition.name, plan.files)
            self._console.debug(f"Copied {len(plan.files)} extra file(s)")
        return package_dir

    def _write_umbrella_package(self, plan: BuildPlan, options: BuildOptions) -> Path:
        name = plan.metadata.project_name
        with self._console.group(f"Built package {name}"):
            package_dir = self._project.package_folder(name)
            mkdir(package_dir)
            self._console.debug(f"Created package path: {package_dir}")

            manifest = format_main_package_json(
                [p.definition for p in plan.packages],
                plan.metadata,
                options.description,
                options.prefix,
                plan.files,
                options.keywords,
            )
            package_json = self._project.package_json(name)
            write_package_json(package_json, manifest)
            self._console.debug(f"Written package json file: {package_json}")

            index_js = self._project.package_folder(name, DISPATCHER_FILENAME)
            atomic_write_text(index_js, plan.exec_script, mode=0o755)
            self._console.debug(f"Written package {DISPATCHER_FILENAME} file: {index_js}")

            self._copy_package_files(name, plan.files)
            self._console.debug(f"Copied {len(plan.files)} extra file(s)")
        return package_dir

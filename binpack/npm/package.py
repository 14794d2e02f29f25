"""Platform package definitions and package.json formatting.

All functions here are pure except ``write_package_json``.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from ..core.result import Err, Ok, Result
from ..platform.files import atomic_write_text
from .errors import MalformedArtifactPath
from .model import Artifact, Manifest, PackageDefinition, ReleaseMetadata
from .platforms import node_cpu, node_os, split_platform_segment

DISPATCHER_FILENAME = "index.js"
MANIFEST_FILENAME = "package.json"


def package_name(name: str, prefix: str | None) -> str:
    """Registry name of a package, scoped under ``prefix`` when given."""
    return f"{prefix}/{name}" if prefix else name


def transform_package(
    artifact: Artifact,
    metadata: ReleaseMetadata,
    files: Sequence[str],
    keywords: Sequence[str],
) -> Result[PackageDefinition, MalformedArtifactPath]:
    """Derive the platform package for one binary artifact.

    ``files`` and ``keywords`` do not influence the definition; they are
    accepted so every transformation step shares one signature.
    """
    parts = PurePosixPath(artifact.path.replace("\\", "/")).parts
    if len(parts) < 2 or not parts[-1]:
        return Err(MalformedArtifactPath(name=artifact.name, path=artifact.path))

    if artifact.goos and artifact.goarch:
        platform: tuple[str, str] | None = (artifact.goos, artifact.goarch)
    else:
        platform = split_platform_segment(parts[-2])
    if platform is None:
        return Err(MalformedArtifactPath(name=artifact.name, path=artifact.path))

    os_tag, cpu_tag = platform
    binary = parts[-1]
    name = f"{metadata.project_name}-{os_tag}-{cpu_tag}"
    return Ok(
        PackageDefinition(
            name=name,
            os=os_tag,
            cpu=cpu_tag,
            bin=binary,
            destination_binary=f"{name}/{binary}",
            version=metadata.version,
        )
    )


def format_package_json(
    definition: PackageDefinition,
    description: str | None,
    prefix: str | None,
    files: Sequence[str],
    keywords: Sequence[str],
) -> Manifest:
    manifest: Manifest = {
        "name": package_name(definition.name, prefix),
        "version": definition.version,
    }
    if description:
        manifest["description"] = description
    manifest.update(
        {
            "os": [node_os(definition.os)],
            "cpu": [node_cpu(definition.cpu)],
            "bin": definition.bin,
            "files": list(files),
            "keywords": list(keywords),
            "preferUnplugged": True,
        }
    )
    return manifest


def format_main_package_json(
    definitions: Sequence[PackageDefinition],
    metadata: ReleaseMetadata,
    description: str | None,
    prefix: str | None,
    files: Sequence[str],
    keywords: Sequence[str],
) -> Manifest:
    """Umbrella manifest: dispatcher entry point plus every platform package
    as an optional dependency pinned to the release version."""
    manifest: Manifest = {
        "name": package_name(metadata.project_name, prefix),
        "version": metadata.version,
    }
    if description:
        manifest["description"] = description
    manifest.update(
        {
            "bin": {metadata.project_name: DISPATCHER_FILENAME},
            "files": [DISPATCHER_FILENAME, *files],
            "keywords": list(keywords),
            "optionalDependencies": {
                package_name(d.name, prefix): metadata.version for d in definitions
            },
        }
    )
    return manifest


def render_package_json(manifest: Manifest) -> str:
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


def write_package_json(path: Path, manifest: Manifest) -> None:
    atomic_write_text(path, render_package_json(manifest))

"""Project layout.

A project is the directory a multi-platform build ran in. It holds the
build descriptors (artifacts.json, metadata.json) and receives the npm
output tree:

    <root>/dist/npm/<project_name>/          umbrella package
    <root>/dist/npm/<project_name>-<os>-<cpu>/  one per platform
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import CONFIG_FILENAME, PackConfig

__all__ = ["Project"]


@dataclass(frozen=True, slots=True)
class Project:
    """Represents a project root and its configured paths."""

    root: Path
    config: PackConfig = field(default_factory=PackConfig)
    npm_dir_override: Path | None = None

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    @property
    def dist_dir(self) -> Path:
        return self.root / self.config.paths.dist

    @property
    def artifacts_path(self) -> Path:
        """Path to the artifacts descriptor."""
        return self.root / self.config.paths.artifacts

    @property
    def metadata_path(self) -> Path:
        """Path to the release metadata descriptor."""
        return self.root / self.config.paths.metadata

    @property
    def npm_dir(self) -> Path:
        """Root of the generated npm package tree."""
        if self.npm_dir_override is not None:
            return self.npm_dir_override
        return self.root / self.config.paths.npm

    def path(self, *parts: str) -> Path:
        """Resolve a project-relative ('/'-separated) path."""
        return self.root.joinpath(*parts)

    def package_folder(self, name: str, *parts: str) -> Path:
        """Directory of one generated package, or a file inside it."""
        return self.npm_dir.joinpath(name, *parts)

    def package_json(self, name: str) -> Path:
        return self.package_folder(name, "package.json")

from __future__ import annotations

from dataclasses import dataclass

# package.json as written to disk
Manifest = dict[str, object]


@dataclass(frozen=True, slots=True)
class Runtime:
    goos: str
    goarch: str


@dataclass(frozen=True, slots=True)
class ReleaseMetadata:
    """Project-wide facts for the current release (metadata.json)."""

    project_name: str
    tag: str
    previous_tag: str
    version: str
    commit: str
    date: str
    runtime: Runtime


@dataclass(frozen=True, slots=True)
class Artifact:
    """One compiled binary listed in artifacts.json.

    ``path`` is project-relative and '/'-separated; the directory holding the
    binary names its platform (e.g. ``darwin_amd64/mytool``).
    """

    name: str
    path: str
    builder: str
    goos: str | None = None
    goarch: str | None = None


@dataclass(frozen=True, slots=True)
class PackageDefinition:
    """Everything needed to write one platform package.

    ``os``/``cpu`` are Go-style tags and form the dispatcher key
    ``"{os}_{cpu}"``. ``destination_binary`` is relative to the npm output
    directory.
    """

    name: str
    os: str
    cpu: str
    bin: str
    destination_binary: str
    version: str

    @property
    def platform_key(self) -> str:
        return f"{self.os}_{self.cpu}"

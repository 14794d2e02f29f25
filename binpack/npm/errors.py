from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One schema violation in the artifacts descriptor."""

    index: int
    field: str
    message: str

    def __str__(self) -> str:
        return f"artifact[{self.index}].{self.field}: {self.message}"


@dataclass(frozen=True, slots=True)
class DescriptorInvalid:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"invalid descriptor {self.path}: {self.reason}"


@dataclass(frozen=True, slots=True)
class EmptyArtifactSet:
    path: Path

    @property
    def message(self) -> str:
        return f"Couldn't find any artifacts in {self.path}"


@dataclass(frozen=True, slots=True)
class EmptyBinaryArtifactSet:
    builder: str

    @property
    def message(self) -> str:
        return f"Couldn't find any binary artifacts from {self.builder} builder"


@dataclass(frozen=True, slots=True)
class InvalidBinaryArtifact:
    issues: tuple[ValidationIssue, ...]

    @property
    def message(self) -> str:
        return f"Invalid binary artifacts ({len(self.issues)} issue(s))"


@dataclass(frozen=True, slots=True)
class MalformedArtifactPath:
    name: str
    path: str

    @property
    def message(self) -> str:
        return f"cannot derive platform from artifact {self.name!r}: {self.path}"


@dataclass(frozen=True, slots=True)
class UnencodableDefinition:
    field: str
    value: str
    reason: str

    @property
    def message(self) -> str:
        return f"cannot embed {self.field}={self.value!r} in dispatcher: {self.reason}"


@dataclass(frozen=True, slots=True)
class DuplicatePlatform:
    platform_key: str
    artifacts: tuple[str, ...]

    @property
    def message(self) -> str:
        paths = ", ".join(self.artifacts)
        return f"platform {self.platform_key} is provided by more than one artifact: {paths}"


@dataclass(frozen=True, slots=True)
class InvalidExtraFile:
    """An extra-file pattern or match that cannot be shipped in a package."""

    path: str
    reason: str

    @property
    def message(self) -> str:
        return f"cannot ship extra file {self.path!r}: {self.reason}"


PackError = (
    DescriptorInvalid
    | EmptyArtifactSet
    | EmptyBinaryArtifactSet
    | InvalidBinaryArtifact
    | MalformedArtifactPath
    | UnencodableDefinition
    | DuplicatePlatform
    | InvalidExtraFile
)

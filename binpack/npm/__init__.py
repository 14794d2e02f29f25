"""npm packaging domain: artifacts, package definitions, manifests, dispatcher."""

from .dispatcher import build_exec_script
from .errors import (
    DescriptorInvalid,
    DuplicatePlatform,
    EmptyArtifactSet,
    EmptyBinaryArtifactSet,
    InvalidBinaryArtifact,
    InvalidExtraFile,
    MalformedArtifactPath,
    PackError,
    UnencodableDefinition,
    ValidationIssue,
)
from .model import Artifact, Manifest, PackageDefinition, ReleaseMetadata, Runtime
from .package import format_main_package_json, format_package_json, transform_package
from .validation import binary_artifact_predicate, validate_binary_artifacts

__all__ = [
    # model
    "Artifact",
    "Manifest",
    "PackageDefinition",
    "ReleaseMetadata",
    "Runtime",
    # errors
    "DescriptorInvalid",
    "DuplicatePlatform",
    "EmptyArtifactSet",
    "EmptyBinaryArtifactSet",
    "InvalidBinaryArtifact",
    "InvalidExtraFile",
    "MalformedArtifactPath",
    "PackError",
    "UnencodableDefinition",
    "ValidationIssue",
    # operations
    "binary_artifact_predicate",
    "build_exec_script",
    "format_main_package_json",
    "format_package_json",
    "transform_package",
    "validate_binary_artifacts",
]

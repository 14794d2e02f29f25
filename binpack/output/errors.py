"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from binpack.core.errors import ErrorCode
from binpack.npm.errors import (
    DescriptorInvalid,
    DuplicatePlatform,
    EmptyArtifactSet,
    EmptyBinaryArtifactSet,
    InvalidBinaryArtifact,
    InvalidExtraFile,
    MalformedArtifactPath,
    PackError,
    UnencodableDefinition,
)
from binpack.output.console import Style

if TYPE_CHECKING:
    from binpack.output.console import ConsoleProtocol

__all__ = ["print_pack_error", "pack_error_exit_code"]


def print_pack_error(error: PackError, console: ConsoleProtocol) -> None:
    """Print a build error; validation failures list every issue."""
    console.error(error.message)
    match error:
        case InvalidBinaryArtifact(issues=issues):
            for issue in issues:
                console.print(f"  {issue}", Style.DIM)
        case EmptyBinaryArtifactSet():
            console.print("hint: check --builder against the artifacts' builder IDs", Style.DIM)
        case DescriptorInvalid() | EmptyArtifactSet():
            console.print("hint: run the multi-platform build first", Style.DIM)
        case InvalidExtraFile():
            console.print("hint: --file patterns are relative to the project root", Style.DIM)
        case _:
            pass


def pack_error_exit_code(error: PackError) -> int:
    match error:
        case DescriptorInvalid() | EmptyArtifactSet() | EmptyBinaryArtifactSet():
            return int(ErrorCode.INPUT_ERROR)
        case InvalidBinaryArtifact() | MalformedArtifactPath() | DuplicatePlatform():
            return int(ErrorCode.INPUT_ERROR)
        case UnencodableDefinition() | InvalidExtraFile():
            return int(ErrorCode.USER_ERROR)
    return int(ErrorCode.USER_ERROR)

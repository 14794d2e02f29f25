"""Process exit codes of the binpack CLI.

CI pipelines branch on these, so values never change meaning.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    # bad option, unusable binpack.toml, no build output to publish
    USER_ERROR = 1
    # artifacts.json / metadata.json missing, malformed or without binaries
    INPUT_ERROR = 2
    # copying a binary or writing a package failed; output is partial
    IO_ERROR = 3
    # npm publish returned non-zero
    PUBLISH_ERROR = 4

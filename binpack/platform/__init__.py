"""Platform abstraction layer (files, subprocesses)."""

from .files import atomic_write_text, copy_file, make_executable, mkdir
from .process import ProcessError, run

__all__ = [
    # files
    "atomic_write_text",
    "copy_file",
    "make_executable",
    "mkdir",
    # process
    "ProcessError",
    "run",
]

"""Application services.

Services coordinate the pure npm domain (npm/) with the filesystem and
subprocesses (platform/), reporting through an injected console.
"""

from .build import BuildOptions, BuildReport, BuildService
from .publish import PublishError, PublishService

__all__ = [
    "BuildOptions",
    "BuildReport",
    "BuildService",
    "PublishError",
    "PublishService",
]

from __future__ import annotations

from ..core.project import Project
from ..output.console import ConsoleProtocol


class BaseService:
    """Shared state for services: the project and an injected console."""

    def __init__(
        self, *, project: Project, console: ConsoleProtocol, verbose: bool = False
    ) -> None:
        self._project = project
        self._console = console
        self._verbose = verbose

    @property
    def project(self) -> Project:
        return self._project

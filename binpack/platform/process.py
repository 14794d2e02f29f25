"""Run external tools (npm) and capture their output as a Result.

A command that cannot start, times out or exits non-zero yields a
``ProcessError``; nothing here raises for those cases.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]

# returncode of a command that never produced an exit status
NOT_RUN = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3]) + (" ..." if len(self.command) > 3 else "")
        return f"{shown} failed (exit {self.returncode})"

    @property
    def last_line(self) -> str | None:
        """Last non-empty stderr line; npm puts its summary there."""
        lines = [line for line in self.stderr.splitlines() if line.strip()]
        return lines[-1].strip() if lines else None


def run(
    cmd: Sequence[str],
    cwd: Path,
    extra_env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    ``extra_env`` is layered over the current environment, so tokens can be
    passed without touching ``os.environ``.
    """
    command = tuple(cmd)
    env = {**os.environ, **extra_env} if extra_env else None
    try:
        proc = subprocess.run(
            command,
            cwd=cwd,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(command, NOT_RUN, "", f"Command timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(command, NOT_RUN, "", str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)

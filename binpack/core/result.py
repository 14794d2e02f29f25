"""Result type for expected failures.

An unreadable descriptor, an artifact that fails validation or a path that
cannot be decomposed is a value, not an exception. Functions return
``Ok(value)`` or ``Err(error)``; callers narrow with ``isinstance`` or
``match`` and decide how to render the error.

    match transform_package(artifact, metadata, files, keywords):
        case Ok(definition):
            console.success(definition.name)
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Never


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def map_err[F](self, f: Callable[[Never], F]) -> Ok[T]:
        return self


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Wrap the error, e.g. validation issues into a pack error."""
        return Err(f(self.error))


type Result[T, E] = Ok[T] | Err[E]

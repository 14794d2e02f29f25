"""Tests for binpack.core.result module."""

import pytest

from binpack.core.result import Err, Ok, Result


def test_ok_map_err_is_noop() -> None:
    result: Result[int, str] = Ok(42)
    assert result.map_err(lambda e: f"error: {e}") == Ok(42)


def test_err_map_err_wraps_error() -> None:
    result: Result[int, tuple[str, ...]] = Err(("a", "b"))
    assert result.map_err(len) == Err(2)


def test_results_are_frozen() -> None:
    result = Ok(42)
    with pytest.raises(AttributeError):
        result.value = 0  # type: ignore[misc]


def test_pattern_matching() -> None:
    def describe(result: Result[int, str]) -> str:
        match result:
            case Ok(value):
                return f"ok {value}"
            case Err(error):
                return f"err {error}"

    assert describe(Ok(3)) == "ok 3"
    assert describe(Err("bad")) == "err bad"

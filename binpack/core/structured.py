"""Narrowing helpers for untyped JSON and TOML.

artifacts.json, metadata.json and binpack.toml are decoded to plain
``object`` trees; everything downstream works on typed values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    return isinstance(obj, dict) and all(
        isinstance(key, str) for key in cast(dict[object, object], obj)
    )


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def as_obj_list(obj: object) -> list[object] | None:
    return cast(list[object], obj) if isinstance(obj, list) else None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """String at ``key`` with surrounding whitespace removed.

    Blank strings and non-strings read as missing.
    """
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_str_list(table: Mapping[str, object], key: str) -> list[str] | None:
    """Non-blank strings of the list at ``key``.

    ``None`` when the key is missing or any item is not a string, so a
    typo such as ``files = "README.md"`` is not half-applied.
    """
    items = as_obj_list(table.get(key))
    if items is None or not all(isinstance(item, str) for item in items):
        return None
    return [item.strip() for item in cast(list[str], items) if item.strip()]

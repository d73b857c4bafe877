"""Narrowing helpers for parsed JSON and TOML documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

StrDict = dict[str, object]


def as_str_dict(obj: object) -> StrDict | None:
    """``obj`` as a string-keyed dict, or None if it is anything else."""
    if not isinstance(obj, dict):
        return None
    d = cast(dict[object, object], obj)
    if any(not isinstance(k, str) for k in d):
        return None
    return cast(StrDict, d)


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Non-blank string at ``key``, stripped; None otherwise."""
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None

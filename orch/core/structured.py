"""Helpers for reading untyped event payloads and TOML tables.

Webhook payloads and config files arrive as arbitrary JSON/TOML; these
helpers narrow them to typed values at the boundary, returning ``None``
instead of raising when a shape does not match.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped; None if missing, not a str, or blank."""
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_path(table: Mapping[str, object], *keys: str) -> object | None:
    """Walk nested tables, e.g. ``get_path(payload, "body", "check_run", "name")``."""
    current: object = table
    for key in keys:
        d = as_str_dict(current)
        if d is None or key not in d:
            return None
        current = d[key]
    return current


def str_mapping(table: Mapping[str, object]) -> dict[str, str]:
    """Keep only the string-valued entries of a table."""
    return {k: v for k, v in table.items() if isinstance(v, str)}


def parse_json_object(raw: bytes | str) -> StrDict | None:
    """Decode a JSON document whose root must be an object."""
    try:
        obj: object = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return as_str_dict(obj)

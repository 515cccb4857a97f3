"""Alias-based field lookup for records whose column names drift."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

FieldAliasSet = Sequence[str]


def resolve(fields: Mapping[str, Any], aliases: FieldAliasSet, default: Any = None) -> Any:
    """Return the value of the first alias that is a key of ``fields``.

    Presence is a key test, so ``0``, ``""`` and ``None`` values still win over
    later aliases. ``default`` is returned when no alias is present.
    """
    for alias in aliases:
        if alias in fields:
            return fields[alias]
    return default


def has_any(fields: Mapping[str, Any], aliases: FieldAliasSet) -> bool:
    return any(alias in fields for alias in aliases)
